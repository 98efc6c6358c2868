import logging
import sys
import tkinter as tk
import tkinter.messagebox as mbox

from config import DATA_PATH, configure_logging
from repo_json import JSONRepo
from tracker import HabitTracker
from ui.analytics import Analytics
from ui.dashboard import Dashboard
from ui.routine_editor import RoutineEditor

logger = logging.getLogger(__name__)


class App(tk.Tk):
    def __init__(self, data_path=DATA_PATH):
        super().__init__()
        self.title("Routine Keeper")
        self.geometry("720x640")
        self.tracker = HabitTracker(JSONRepo(data_path))
        ok, error = self.tracker.init_app_data()
        if not ok:
            mbox.showerror("Routine Keeper", error)

        container = tk.Frame(self)
        container.pack(fill="both", expand=True)
        container.rowconfigure(0, weight=1)
        container.columnconfigure(0, weight=1)

        self.frames = {}
        for F in (Dashboard, RoutineEditor, Analytics):
            frame = F(parent=container, controller=self)
            self.frames[F.__name__] = frame
            frame.grid(row=0, column=0, sticky="nsew")

        self.show("Dashboard")

    def show(self, name):
        frame = self.frames[name]
        if hasattr(frame, "refresh"):
            frame.refresh()
        frame.tkraise()

    def edit_routine(self, routine_id):
        self.frames["RoutineEditor"].load(routine_id)
        self.show("RoutineEditor")


def main():
    configure_logging()
    logger.info("Starting Routine Keeper with data at %s", DATA_PATH)
    App().mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
