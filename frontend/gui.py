#!/usr/bin/env python3
"""
Calculator GUI

A four-function calculator window (Tkinter):
- Read-only, right-aligned display across the top.
- 4x4 keypad: digits, the four operators, "C" (clear) and "=" (evaluate).

All state lives in backend.controller.CalculatorController; this module only
builds widgets and forwards button clicks to it.
"""

import logging
import tkinter as tk
from typing import Optional

from backend.controller import BUTTON_ROWS, COMMANDS, CalculatorController

logger = logging.getLogger(__name__)


# -------------------------
# Visual theme / constants
# -------------------------
WINDOW_TITLE = "Cool Calculator"

BG = "#0f1113"          # main app background
PANEL_BG = "#17181A"    # display background
BTN_BG = "#2b2d30"      # button tile background
CMD_BG = "#3a3d41"      # "C" and "=" tiles
FG = "#E6EEF3"          # foreground text (light)

DISPLAY_FONT = ("Consolas", 18)
BUTTON_FONT = ("Segoe UI", 14)

# Button tile size in pixels (width, height)
BUTTON_SIZE = (50, 40)
PAD = 4


# -------------------------
# Main application class
# -------------------------
class CalculatorGUI(tk.Tk):
    def __init__(self, controller: Optional[CalculatorController] = None):
        super().__init__()

        # Window setup
        self.title(WINDOW_TITLE)
        self.configure(bg=BG)
        self.resizable(False, False)

        self.display_var = tk.StringVar()
        self.controller = controller or CalculatorController()
        # Controller pushes every display change into the Entry
        self.controller.on_display = self.display_var.set
        self.display_var.set(self.controller.display)

        self._build_display()
        self._build_keypad()
        logger.debug("Calculator window built")

    def _build_display(self):
        """Read-only display spanning the keypad width."""
        self.display = tk.Entry(self, textvariable=self.display_var, bg=PANEL_BG, fg=FG,
                                readonlybackground=PANEL_BG, relief="flat",
                                font=DISPLAY_FONT, justify="right", state="readonly")
        self.display.grid(row=0, column=0, columnspan=len(BUTTON_ROWS[0]),
                          sticky="nsew", padx=PAD, pady=(PAD * 2, PAD), ipady=6)

    def _build_keypad(self):
        """
        Keypad grid below the display. Each tile sits in a fixed-size frame so
        buttons keep their pixel size regardless of font metrics.
        """
        width, height = BUTTON_SIZE
        for r, row in enumerate(BUTTON_ROWS, start=1):
            for c, label in enumerate(row):
                cell = tk.Frame(self, width=width, height=height, bg=BG)
                cell.grid(row=r, column=c, padx=PAD, pady=PAD)
                cell.grid_propagate(False)
                cell.pack_propagate(False)
                bg = CMD_BG if label in COMMANDS else BTN_BG
                btn = tk.Button(cell, text=label, bg=bg, fg=FG, relief="flat",
                                font=BUTTON_FONT, command=self._map_button(label))
                btn.pack(fill="both", expand=True)

    def _map_button(self, label: str):
        """Return the click handler for a keypad label."""
        return lambda l=label: self.controller.press(l)
