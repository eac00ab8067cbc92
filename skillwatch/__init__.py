"""Skill cooldown tracker: classifies player actions into practiced skills and times their cooldowns."""

__version__ = "0.1.0"
