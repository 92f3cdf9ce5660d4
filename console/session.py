"""
Session Gate

A single boolean flag that gates the console. No credentials are checked.
"""

import logging

logger = logging.getLogger(__name__)


class SessionGate:
    """Tracks whether the console operator is signed in"""

    def __init__(self):
        self._logged_in = False

    def __repr__(self):
        return f"<SessionGate logged_in=[{self._logged_in}]>"

    @property
    def is_authenticated(self) -> bool:
        """True once login() has been called and until logout()"""
        return self._logged_in

    def login(self, username: str = None):
        """Signs in unconditionally; any submitted form values are accepted"""
        logger.info("Console login for %s", username or "<anonymous>")
        self._logged_in = True

    def logout(self):
        """Signs out; users and payments stay in memory"""
        logger.info("Console logout")
        self._logged_in = False
