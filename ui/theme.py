"""Shared visual style helpers for the Tk UI (early-morning palette)."""

import logging
import tkinter as tk

from PIL import Image, ImageTk

logger = logging.getLogger(__name__)

# Palette
BG = "#eef2f5"
CARD_BG = "#ffffff"
SOFT_BG = "#f5f8fb"
BORDER = "#d5dde5"
TEXT = "#1f2a36"
MUTED = "#66768a"
ACCENT = "#3f7cac"       # dawn blue
ACCENT_DARK = "#2d5f86"
SUCCESS = "#4f9d69"
DANGER = "#c0504d"
REST = "#c9a227"         # day-off gold
HILITE = "#e3edf6"

# Typography
FONT_FAMILY = "Helvetica"
TITLE = (FONT_FAMILY, 18, "bold")
HEADING = (FONT_FAMILY, 13, "bold")
BODY = (FONT_FAMILY, 11)
SMALL = (FONT_FAMILY, 9)
BUTTON = (FONT_FAMILY, 10, "bold")


def card(parent, soft: bool = False, **kwargs):
    return tk.Frame(
        parent,
        bg=SOFT_BG if soft else CARD_BG,
        bd=0,
        highlightbackground=BORDER,
        highlightthickness=1,
        **kwargs,
    )


def heading_label(parent, text, font=TITLE):
    return tk.Label(parent, text=text, bg=parent.cget("bg"), fg=TEXT, font=font)


def muted_label(parent, text="", font=BODY, wrap=None):
    return tk.Label(
        parent,
        text=text,
        bg=parent.cget("bg"),
        fg=MUTED,
        font=font,
        justify="left",
        wraplength=wrap,
        anchor="w",
    )


def button(parent, text, command, color=ACCENT, active=ACCENT_DARK, width=None):
    return tk.Button(
        parent,
        text=text,
        command=command,
        width=width,
        bg=color,
        fg="#ffffff",
        activebackground=active,
        activeforeground="#ffffff",
        relief="flat",
        bd=0,
        font=BUTTON,
        padx=12,
        pady=6,
        cursor="hand2",
        highlightthickness=0,
    )


def ghost_button(parent, text, command):
    return tk.Button(
        parent,
        text=text,
        command=command,
        bg=CARD_BG,
        fg=ACCENT,
        activebackground=HILITE,
        activeforeground=ACCENT_DARK,
        relief="solid",
        bd=1,
        font=BUTTON,
        padx=10,
        pady=5,
        cursor="hand2",
    )


class Backdrop:
    """Scaled background image behind a frame; does nothing if the file is missing."""

    def __init__(self, frame: tk.Frame, path: str):
        self.frame = frame
        self.photo = None
        try:
            self.raw = Image.open(path)
        except OSError as exc:
            logger.debug("No backdrop at %s: %s", path, exc)
            self.raw = None
            return
        self.label = tk.Label(frame, bd=0)
        self.label.place(relwidth=1, relheight=1)
        frame.bind("<Configure>", self._resize, add="+")

    def _resize(self, event):
        if not (self.raw and event.width > 1 and event.height > 1):
            return
        resized = self.raw.resize((event.width, event.height), Image.LANCZOS)
        self.photo = ImageTk.PhotoImage(resized)
        self.label.configure(image=self.photo)
