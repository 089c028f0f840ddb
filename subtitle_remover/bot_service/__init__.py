"""Telegram front end for the subtitle remover."""
