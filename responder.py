# responder.py - response generation for chat questions
from typing import Dict, List, Tuple

from config import MOCK_RESPONSE, MOCK_TABLE


class MockResponder:
    """Answers every question with the same canned text and two-row table.

    The session store only relies on ``generate_response``; swap in any object
    with that method to produce real answers.
    """

    def generate_response(self, question: str) -> Tuple[str, List[Dict[str, str]]]:
        table = [{"key": key, "value": value} for key, value in MOCK_TABLE]
        return MOCK_RESPONSE, table
