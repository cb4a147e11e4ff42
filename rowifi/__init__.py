"""Models, bind evaluation and Roblox API access for a Discord verification bot."""

__version__ = "0.1.0"