"""
Player Service

Issues and verifies anonymous player tokens. A token only carries a random
player id; it stands in for the browser cookie that scopes stored progress.
"""

import datetime
import uuid
from typing import Any, Dict, Optional

import jwt
from flask import current_app


class PlayerService:
    """
    Anonymous player identity using signed JWTs.
    """

    def __init__(self, jwt_secret: str, expiration_days: int = 365):
        """
        Args:
            jwt_secret: Secret key for JWT signing
            expiration_days: Token lifetime
        """
        self.jwt_secret = jwt_secret
        self.expiration_days = expiration_days

    def issue_token(self) -> Dict[str, Any]:
        """
        Create a new player id and its token.

        Returns:
            Dictionary with success status, token and player data
        """
        player_id = uuid.uuid4().hex
        token_payload = {
            "player_id": player_id,
            "exp": datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(days=self.expiration_days)
        }
        token = jwt.encode(token_payload, self.jwt_secret, algorithm="HS256")
        return {
            "success": True,
            "token": token,
            "player": {"id": player_id}
        }

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a player token.

        Returns:
            Dictionary with success status and player data or error
        """
        if not token:
            return {"success": False, "error": "Token is required"}

        try:
            payload = jwt.decode(token, self.jwt_secret, algorithms=["HS256"])
        except jwt.ExpiredSignatureError:
            return {"success": False, "error": "Token has expired"}
        except jwt.InvalidTokenError:
            return {"success": False, "error": "Invalid token"}

        player_id = payload.get("player_id")
        if not player_id:
            return {"success": False, "error": "Invalid token payload"}

        return {"success": True, "player": {"id": player_id}}


def get_player_service() -> Optional[PlayerService]:
    """Get the player service of the current Flask application."""
    return current_app.extensions.get('player_service')
