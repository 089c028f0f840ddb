"""Reply keyboards shown to the user."""

from __future__ import annotations

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup

REMOVE_BUTTON = "Remove subtitles"
RESET_BUTTON = "Start over"

PROCESS_KEYBOARD = ReplyKeyboardMarkup(
    keyboard=[
        [KeyboardButton(text=REMOVE_BUTTON)],
        [KeyboardButton(text=RESET_BUTTON)],
    ],
    resize_keyboard=True,
    input_field_placeholder="Ready to remove subtitles?",
)

RESET_KEYBOARD = ReplyKeyboardMarkup(
    keyboard=[[KeyboardButton(text=RESET_BUTTON)]],
    resize_keyboard=True,
    one_time_keyboard=True,
)
