"""
Account Models
Record definitions for accounts, profiles and catalog items
"""

from typing import Optional, Dict, Any
from dataclasses import dataclass, replace


@dataclass
class Account:
    """Account record; the only place a password hash lives"""
    username: str
    password_hash: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary without the password hash"""
        return {
            'username': self.username,
            'first_name': self.first_name,
            'last_name': self.last_name,
        }

    def copy(self, **changes) -> "Account":
        return replace(self, **changes)


@dataclass
class Profile:
    """Public projection of an account"""
    username: str

    def to_dict(self) -> Dict[str, Any]:
        return {'username': self.username}

    def copy(self, **changes) -> "Profile":
        return replace(self, **changes)


@dataclass
class AccountView:
    """Redacted account handed back to callers"""
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountView":
        return cls(**account.to_dict())


@dataclass
class Item:
    """Catalog item with an uploaded photo"""
    id: str
    path: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[str] = None
    membership: Optional[str] = None
    part: Optional[str] = None
    age: Optional[str] = None

    DESCRIPTIVE_FIELDS = ('first_name', 'last_name', 'gender', 'membership', 'part', 'age')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'path': self.path,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'gender': self.gender,
            'membership': self.membership,
            'part': self.part,
            'age': self.age,
        }
