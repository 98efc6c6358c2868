import threading

from streaks_service import process_request, serve_requests


def test_reports_streaks_with_days_off():
    response = process_request(
        {
            "dates": ["2025-01-10", "2025-01-12", "not-a-date", "2025-01-12"],
            "day_offs": ["2025-01-11"],
            "today": "2025-01-12",
        }
    )
    assert response == {
        "ok": True,
        "result": {"current_streak": 2, "longest_streak": 2, "total_completions": 2},
    }


def test_broken_streak_is_not_current():
    response = process_request(
        {"dates": ["2025-01-01", "2025-01-02", "2025-01-03"], "today": "2025-01-10"}
    )
    assert response["result"]["current_streak"] == 0
    assert response["result"]["longest_streak"] == 3


def test_rejects_bad_requests():
    assert process_request([]) == {"ok": False, "error": "Request must contain a 'dates' array."}
    assert process_request({"dates": "2025-01-01"})["ok"] is False
    assert process_request({"dates": ["nope"]}) == {"ok": False, "error": "No valid dates provided."}
    assert process_request({"dates": ["2025-01-01"], "day_offs": "x"})["ok"] is False
    assert process_request({"dates": ["2025-01-01"], "today": "soon"})["ok"] is False


class StubSocket:
    """Stands in for a REP socket; stops the loop after the last reply."""

    def __init__(self, requests, stop_event):
        self.requests = list(requests)
        self.stop_event = stop_event
        self.replies = []

    def poll(self, timeout=None):
        return bool(self.requests)

    def recv_json(self):
        request = self.requests.pop(0)
        if isinstance(request, Exception):
            raise request
        return request

    def send_json(self, payload):
        self.replies.append(payload)
        if not self.requests:
            self.stop_event.set()


def test_malformed_message_gets_an_error_and_the_loop_continues():
    stop = threading.Event()
    socket = StubSocket(
        [ValueError("Expecting value"), {"dates": ["2025-01-10"], "today": "2025-01-10"}], stop
    )
    serve_requests(socket, stop)
    assert socket.replies[0] == {"ok": False, "error": "Request must be JSON."}
    assert socket.replies[1]["result"]["current_streak"] == 1
