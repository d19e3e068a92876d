"""Minimal Twitch IRC chat bot.

Connects to a single channel, answers server keepalives and runs a couple of
owner-only chat commands, reconnecting whenever the chat connection drops.
"""

__version__ = "0.1.0"
