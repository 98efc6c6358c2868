"""Microservice that reports current and longest streaks for a list of completion dates."""

import logging
import sys
import threading

import zmq

from config import STREAKS_PORT, configure_logging
from models import format_date, normalize_date
from streaks import current_streak, longest_streak

logger = logging.getLogger("streaks_service")


def _error(message):
    """Return a consistent error payload."""
    return {"ok": False, "error": message}


def _extract_dates(payload, field):
    """Canonical dates from payload[field]; unreadable entries are skipped."""
    values = payload.get(field, [])
    if not isinstance(values, list):
        return None
    return [d for d in (normalize_date(v) for v in values) if d]


def process_request(payload: dict) -> dict:
    """
    payload: {"dates": [str], "day_offs": [str] (optional), "today": str (optional)}
    returns {"ok": True, "result": {...}} or {"ok": False, "error": ...}
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("dates"), list):
        return _error("Request must contain a 'dates' array.")
    dates = _extract_dates(payload, "dates")
    if not dates:
        return _error("No valid dates provided.")
    day_offs = _extract_dates(payload, "day_offs")
    if day_offs is None:
        return _error("'day_offs' must be an array.")

    today = normalize_date(payload.get("today")) if payload.get("today") else format_date()
    if today is None:
        return _error("'today' must be a YYYY-MM-DD date.")

    exempt = set(day_offs)
    is_day_off = lambda day: day in exempt  # noqa: E731
    return {
        "ok": True,
        "result": {
            "current_streak": current_streak(dates, today, is_day_off),
            "longest_streak": longest_streak(dates, is_day_off),
            "total_completions": len(set(dates)),
        },
    }


def shutdown_listener(stop_event):
    """Wait for the operator to type 'q' then Enter, then ask the loop to stop."""
    print("Press 'q' then Enter to stop the microservice...")
    for line in sys.stdin:
        if line.strip().lower() == "q":
            stop_event.set()
            logger.info("Shutdown requested")
            break


def start_shutdown_listener(stop_event):
    listener_thread = threading.Thread(
        target=shutdown_listener,
        args=(stop_event,),
        daemon=True,
    )
    listener_thread.start()
    return listener_thread


def serve_requests(socket, stop_event):
    """Answer requests until stop_event is set."""
    while not stop_event.is_set():
        if socket.poll(timeout=1000):
            try:
                payload = socket.recv_json()
            except ValueError as exc:
                logger.warning("Malformed request: %s", exc)
                socket.send_json(_error("Request must be JSON."))
                continue
            socket.send_json(process_request(payload))


def build_server_socket(port):
    context = zmq.Context()
    socket = context.socket(zmq.REP)
    address = f"tcp://*:{port}"
    socket.bind(address)
    return context, socket, address


def shutdown(context, socket):
    logger.info("Shutting down streaks microservice")
    socket.close()
    context.term()


def run_service(port):
    context, socket, address = build_server_socket(port)
    logger.info("Streaks microservice listening on %s", address)
    stop_event = threading.Event()
    start_shutdown_listener(stop_event)
    try:
        serve_requests(socket, stop_event)
    except zmq.ZMQError as exc:
        logger.error("Error in streaks microservice: %s", exc)
    finally:
        shutdown(context, socket)


def main(argv=None):
    configure_logging()
    argv = sys.argv[1:] if argv is None else argv
    port = STREAKS_PORT
    if argv:
        try:
            port = int(argv[0])
        except ValueError:
            logger.warning("Invalid port %r, using %s instead", argv[0], STREAKS_PORT)
    run_service(port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
