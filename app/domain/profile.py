"""
Profile domain entity (one-to-one with user)
"""
from dataclasses import dataclass
from typing import Dict, Any, Optional


@dataclass
class Profile:
    id: str
    user_id: int
    full_name: Optional[str] = None

    @staticmethod
    def create(full_name: Optional[str] = None) -> Dict[str, Any]:
        return {"full_name": full_name}

    @staticmethod
    def update(full_name: Optional[str]) -> Dict[str, Any]:
        return {"full_name": full_name}
