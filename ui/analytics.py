import tkinter as tk

from microservice_clients import gather_streak_snapshot
from ui import theme


class Analytics(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller

        header = theme.card(self)
        header.pack(fill="x", padx=16, pady=(14, 10))
        head_row = tk.Frame(header, bg=theme.CARD_BG)
        head_row.pack(fill="x", padx=14, pady=12)
        theme.heading_label(head_row, "Analytics").pack(anchor="w")
        theme.muted_label(
            head_row,
            "Current and longest streak per habit, counted from your completion history.",
            wrap=640,
        ).pack(anchor="w", pady=(4, 0))

        buttons = tk.Frame(header, bg=theme.CARD_BG)
        buttons.pack(fill="x", padx=14, pady=(6, 10))
        theme.button(buttons, "Refresh", self.refresh).pack(side="left")
        theme.ghost_button(buttons, "Back", lambda: controller.show("Dashboard")).pack(
            side="left", padx=8
        )

        self.streaks_var = self._section("Streaks by Habit")
        self.dayoff_var = self._section("Days Off")

    def _section(self, title: str):
        frame = theme.card(self)
        frame.pack(fill="x", padx=16, pady=8)
        tk.Label(
            frame, text=title, font=theme.HEADING, bg=theme.CARD_BG, fg=theme.TEXT
        ).pack(anchor="w", padx=12, pady=(10, 0))
        var = tk.StringVar()
        tk.Label(
            frame,
            textvariable=var,
            anchor="w",
            justify="left",
            wraplength=640,
            bg=theme.CARD_BG,
            fg=theme.TEXT,
            font=theme.BODY,
        ).pack(fill="x", padx=12, pady=8)
        return var

    def refresh(self):
        tracker = self.controller.tracker
        self.streaks_var.set(self._render_streaks(gather_streak_snapshot(tracker)))
        records = tracker.day_off_records()
        self.dayoff_var.set(", ".join(records) if records else "No days off taken this month.")

    def _render_streaks(self, snapshot: dict) -> str:
        entries = snapshot.get("entries") or []
        if not entries:
            return "No habits yet."

        lines = []
        for entry in entries:
            label = f"{entry['routine'].name} / {entry['habit'].title}"
            if entry["error"]:
                lines.append(f"{label}: {entry['error']}")
            else:
                current = entry["result"].get("current_streak", 0)
                longest = entry["result"].get("longest_streak", 0)
                lines.append(f"{label}: current {current}, longest {longest}")
        return "\n".join(lines)
