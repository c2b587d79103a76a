"""Slack slash-command bot that gathers four players for a foosball game."""
