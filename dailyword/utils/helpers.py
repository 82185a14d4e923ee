"""
Helper Functions

Contains utility functions used by the HTTP controllers.
"""

from typing import Any, Optional, Tuple
from flask import jsonify, request


def get_guess_from_request() -> Optional[str]:
    """Return the 'guess' field of the JSON body, or None if missing."""
    data = request.get_json(silent=True) or {}
    guess = data.get('guess')
    return guess if isinstance(guess, str) else None


def error_response(message: str, status: int) -> Tuple[Any, int]:
    return jsonify({'success': False, 'error': message}), status
