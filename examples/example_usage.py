"""Example: drive the board through the service layer (no Flask).

Controllers are a thin layer; the attendance rules live in the services.
"""

from outbound_board.config import load_settings
from outbound_board.container import build_container


def main():
    container = build_container(load_settings("outbound_board.config.development"))
    board = container.board_service

    unsubscribe = board.subscribe_status(lambda snap: print("board:", {k: v.status.value for k, v in snap.records.items()}))
    try:
        session = board.login("김민수", "1234")
        board.submit_mark_out(session, "Client HQ")
        board.submit_mark_return(session)
        for entry in board.get_recent_logs(5):
            print(entry.created_at.strftime("%H:%M"), entry.text)
    finally:
        unsubscribe()
        container.shutdown()


if __name__ == "__main__":
    main()
