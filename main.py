import logging

import customtkinter as ctk

import db
from auth import Session
from config import load_config
from gui_dashboard import Dashboard
from gui_login import LoginWindow

logger = logging.getLogger(__name__)


def setup_logging(level):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def run_windows(session, config):
    """
    Alternate between the login window and the dashboard until the user
    closes a window without logging in or out.
    """
    while True:
        LoginWindow(session).mainloop()
        if not session.is_logged_in:
            break
        Dashboard(session, config).mainloop()
        if session.is_logged_in:
            # dashboard closed without logging out
            break


def main():
    try:
        config = load_config()
    except Exception as e:
        raise SystemExit(f"Configuration error: {str(e)}")
    setup_logging(config['LOG_LEVEL'])
    ctk.set_appearance_mode(config['APPEARANCE_MODE'])
    ctk.set_default_color_theme(config['COLOR_THEME'])

    db.use_database(config['DB_FILE'])
    try:
        db.init_db()
    except db.StorageError as e:
        raise SystemExit(f"Database error: {str(e)}")
    logger.info("Using database %s", config['DB_FILE'])

    session = Session()
    try:
        run_windows(session, config)
    finally:
        db.close_db()
        logger.info("Database connection closed")


if __name__ == "__main__":
    main()
