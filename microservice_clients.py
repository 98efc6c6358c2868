"""Helpers to call the streaks microservice from the Tk application."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import zmq

from config import SERVICE_TIMEOUT_MS, STREAKS_PORT
from models import format_date

logger = logging.getLogger(__name__)

_CONTEXT = zmq.Context.instance()


# ---------- Low-level send helpers ----------
def _make_socket(port: int):
    socket = _CONTEXT.socket(zmq.REQ)
    socket.setsockopt(zmq.RCVTIMEO, SERVICE_TIMEOUT_MS)
    socket.setsockopt(zmq.SNDTIMEO, SERVICE_TIMEOUT_MS)
    socket.setsockopt(zmq.LINGER, 0)
    socket.connect(f"tcp://localhost:{port}")
    return socket


def _send_json(port: int, payload: dict):
    socket = _make_socket(port)
    try:
        socket.send_json(payload)
        return socket.recv_json(), None
    except zmq.error.Again:
        return None, f"Timed out contacting service on port {port}."
    except (zmq.ZMQError, ValueError) as exc:
        logger.warning("Streaks service on port %s failed: %s", port, exc)
        return None, f"Service error on port {port}: {exc}"
    finally:
        socket.close()


# ---------- Microservice callers ----------
def streaks_for_dates(
    date_strings: List[str],
    day_offs: Optional[List[str]] = None,
    today: Optional[str] = None,
    port: int = STREAKS_PORT,
):
    """Current and longest streak for a habit's completion dates."""
    if not date_strings:
        return None, "No completions yet."

    payload = {
        "dates": date_strings,
        "day_offs": day_offs or [],
        "today": today or format_date(),
    }
    response, error = _send_json(port, payload)
    if error:
        return None, error
    if not response.get("ok"):
        return None, response.get("error", "Unknown streaks error.")
    return response.get("result", {}), None


# ---------- Public aggregation ----------
def gather_streak_snapshot(tracker, today: Optional[str] = None, port: int = STREAKS_PORT) -> Dict:
    """
    One entry per habit of every routine, for the analytics screen.
    Each entry: {"routine", "habit", "result", "error"}.
    """
    today = today or format_date()
    day_offs = tracker.day_off_records()
    entries = []
    for routine in tracker.list_routines():
        for habit in routine.habits:
            dates = tracker.completion_dates(routine.id, habit.id)
            result, error = streaks_for_dates(dates, day_offs, today, port=port)
            entries.append(
                {"routine": routine, "habit": habit, "result": result, "error": error}
            )
    return {"entries": entries}
