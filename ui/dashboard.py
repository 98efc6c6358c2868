# ui/dashboard.py (Today screen)
import tkinter as tk
import tkinter.messagebox as mbox

from models import format_date
from ui import theme


class Dashboard(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller
        self.backdrop = theme.Backdrop(self, "images/dashboard.png")

        main = theme.card(self)
        main.pack(fill="both", expand=True, padx=16, pady=14)

        # Header
        header = tk.Frame(main, bg=main.cget("bg"))
        header.pack(fill="x", padx=12, pady=(12, 4))
        self.title = theme.heading_label(header, "Today")
        self.title.pack(anchor="w")
        self.quote = theme.muted_label(header, wrap=640, font=(theme.FONT_FAMILY, 11, "italic"))
        self.quote.pack(anchor="w", pady=(2, 0))

        # Day-off bar
        dayoff = theme.card(main, soft=True)
        dayoff.pack(fill="x", padx=12, pady=6)
        self.dayoff_label = tk.Label(
            dayoff, bg=dayoff.cget("bg"), fg=theme.TEXT, font=theme.BODY, anchor="w"
        )
        self.dayoff_label.pack(side="left", padx=10, pady=8)
        self.dayoff_btn = theme.button(dayoff, "Take day off", self.toggle_day_off, color=theme.REST)
        self.dayoff_btn.pack(side="right", padx=10, pady=6)

        # Controls row
        controls = tk.Frame(main, bg=main.cget("bg"))
        controls.pack(fill="x", padx=12, pady=(4, 8))
        theme.button(controls, "New Routine", lambda: controller.edit_routine(None)).pack(side="left")
        theme.ghost_button(controls, "Analytics", lambda: controller.show("Analytics")).pack(
            side="left", padx=8
        )

        self.list_frame = tk.Frame(main, bg=main.cget("bg"))
        self.list_frame.pack(fill="both", expand=True, padx=12)

        # Daily note
        note_card = theme.card(main, soft=True)
        note_card.pack(fill="x", padx=12, pady=(6, 12))
        theme.muted_label(note_card, "Note for today").pack(anchor="w", padx=10, pady=(6, 0))
        note_row = tk.Frame(note_card, bg=note_card.cget("bg"))
        note_row.pack(fill="x", padx=10, pady=6)
        self.note = tk.Entry(note_row, font=theme.BODY, relief="solid", bd=1)
        self.note.pack(side="left", fill="x", expand=True)
        theme.ghost_button(note_row, "Save", self.save_note).pack(side="left", padx=(8, 0))

    # ---------- Refresh ----------
    def refresh(self):
        tracker = self.controller.tracker
        today = format_date()
        self.title.configure(text=f"Today, {today}")
        self.quote.configure(text=f"“{tracker.todays_quote(today)}”")
        self._refresh_day_off(today)
        self._refresh_routines(today)
        self.note.delete(0, "end")
        self.note.insert(0, tracker.get_daily_note(today))

    def _refresh_day_off(self, today):
        status = self.controller.tracker.day_off_status(today)
        text = f"Days off this month: {status['used']}/{status['limit']}"
        if status["over_quota"]:
            text += "  (over the monthly limit)"
        if status["taken_today"]:
            text += "  (resting today)"
            self.dayoff_btn.configure(text="Undo day off", state="normal")
        else:
            can_take = self.controller.tracker.can_take_day_off(today)
            self.dayoff_btn.configure(
                text="Take day off", state="normal" if can_take else "disabled"
            )
        self.dayoff_label.configure(text=text)

    def _refresh_routines(self, today):
        for w in self.list_frame.winfo_children():
            w.destroy()
        tracker = self.controller.tracker
        routines = tracker.list_routines()

        if not routines:
            theme.muted_label(
                self.list_frame, "No routines yet. Create one to start building streaks."
            ).pack(anchor="w", pady=10)
            return

        for routine in routines:
            box = theme.card(self.list_frame)
            box.pack(fill="x", pady=5)
            head = tk.Frame(box, bg=box.cget("bg"))
            head.pack(fill="x", padx=10, pady=(8, 2))
            theme.heading_label(head, routine.name, theme.HEADING).pack(side="left")
            theme.button(
                head,
                "Delete",
                lambda rid=routine.id, name=routine.name: self._delete_routine(rid, name),
                color=theme.DANGER,
                active=theme.DANGER,
            ).pack(side="right")
            theme.ghost_button(
                head, "Edit", lambda rid=routine.id: self.controller.edit_routine(rid)
            ).pack(side="right", padx=6)

            for index, habit in enumerate(routine.habits):
                done = tracker.is_completed(routine.id, habit.id, today)
                row = tk.Frame(box, bg=box.cget("bg"))
                row.pack(fill="x", padx=10, pady=3)
                tk.Label(
                    row, text=habit.time, width=6, bg=row.cget("bg"), fg=theme.MUTED, font=theme.BODY
                ).pack(side="left")
                tk.Label(
                    row, text=habit.title, anchor="w", bg=row.cget("bg"), fg=theme.TEXT, font=theme.BODY
                ).pack(side="left", fill="x", expand=True)
                tk.Label(
                    row,
                    text=f"streak {habit.streak}",
                    bg=row.cget("bg"),
                    fg=theme.SUCCESS if habit.streak else theme.MUTED,
                    font=theme.SMALL,
                ).pack(side="left", padx=8)
                theme.button(
                    row,
                    "Completed" if done else "Complete",
                    lambda rid=routine.id, i=index, d=done: self.toggle(rid, i, d),
                    color=theme.SUCCESS if done else theme.ACCENT,
                    width=10,
                ).pack(side="right")
            tk.Frame(box, height=6, bg=box.cget("bg")).pack()

    # ---------- Actions ----------
    def _report(self, error):
        if error:
            mbox.showerror("Routine Keeper", error)

    def toggle(self, routine_id, habit_index, done):
        tracker = self.controller.tracker
        if done:
            _, error = tracker.uncomplete_habit(routine_id, habit_index)
        else:
            _, error = tracker.complete_habit(routine_id, habit_index)
        self._report(error)
        self.refresh()

    def toggle_day_off(self):
        tracker = self.controller.tracker
        if tracker.is_day_off():
            _, error = tracker.undo_day_off()
        else:
            if not mbox.askyesno("Take a day off?", "Use one of this month's days off for today?"):
                return
            _, error = tracker.take_day_off()
        self._report(error)
        self.refresh()

    def _delete_routine(self, routine_id, name):
        if not mbox.askyesno(
            "Delete routine?",
            f"Delete “{name}”?\nIts habits and completion history are removed too.",
        ):
            return
        _, error = self.controller.tracker.delete_routine(routine_id)
        self._report(error)
        self.refresh()

    def save_note(self):
        _, error = self.controller.tracker.set_daily_note(format_date(), self.note.get())
        self._report(error)
