# ui/routine_editor.py
import tkinter as tk
import tkinter.messagebox as mbox

from routines import parse_habit_lines
from ui import theme


class RoutineEditor(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent, bg=theme.BG)
        self.controller = controller
        self.routine_id = None
        self.backdrop = theme.Backdrop(self, "images/routine.png")

        wrapper = theme.card(self)
        wrapper.pack(fill="x", padx=16, pady=18)

        header = tk.Frame(wrapper, bg=wrapper.cget("bg"))
        header.pack(fill="x", padx=14, pady=(12, 2))
        self.title = theme.heading_label(header, "New Routine")
        self.title.pack(anchor="w")
        theme.muted_label(
            header,
            "One habit per line, time first: 07:00 Drink water",
            wrap=640,
        ).pack(anchor="w", pady=(4, 0))

        form = tk.Frame(wrapper, bg=wrapper.cget("bg"))
        form.pack(padx=14, pady=10, fill="x")
        form.columnconfigure(1, weight=1)
        tk.Label(form, text="Name", bg=form.cget("bg"), fg=theme.TEXT, font=theme.BODY).grid(
            row=0, column=0, sticky="w", pady=4
        )
        self.name = tk.Entry(form, font=theme.BODY, relief="solid", bd=1)
        self.name.grid(row=0, column=1, sticky="ew", padx=8, pady=4)
        tk.Label(form, text="Habits", bg=form.cget("bg"), fg=theme.TEXT, font=theme.BODY).grid(
            row=1, column=0, sticky="nw", pady=4
        )
        self.habits = tk.Text(form, height=8, font=theme.BODY, relief="solid", bd=1)
        self.habits.grid(row=1, column=1, sticky="ew", padx=8, pady=4)

        controls = tk.Frame(wrapper, bg=wrapper.cget("bg"))
        controls.pack(fill="x", padx=14, pady=(0, 14))
        theme.button(controls, "Save", self.save).pack(side="left")
        theme.ghost_button(controls, "Back", lambda: controller.show("Dashboard")).pack(
            side="left", padx=8
        )

    def load(self, routine_id=None):
        self.routine_id = routine_id
        self.name.delete(0, "end")
        self.habits.delete("1.0", "end")
        routine = self.controller.tracker.get_routine(routine_id) if routine_id else None
        if routine is None:
            self.routine_id = None
            self.title.configure(text="New Routine")
            return
        self.title.configure(text=f"Edit {routine.name}")
        self.name.insert(0, routine.name)
        self.habits.insert("1.0", "\n".join(f"{h.time} {h.title}" for h in routine.habits))

    def save(self):
        tracker = self.controller.tracker
        name = self.name.get()
        text = self.habits.get("1.0", "end")
        if self.routine_id:
            routine = tracker.get_routine(self.routine_id)
            habits = parse_habit_lines(text, routine.habits if routine else ())
            result, error = tracker.update_routine(self.routine_id, name=name, habits=habits)
        else:
            result, error = tracker.add_routine(name, parse_habit_lines(text))
        if error:
            mbox.showerror("Routine Keeper", error)
            if result is None:
                return
        self.controller.show("Dashboard")
