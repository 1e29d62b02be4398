"""Account service orchestrating persistence, credential hashing and token issuance."""

from __future__ import annotations

import logging
from typing import Protocol

from ...errors import DuplicateAccount, InvalidCredentials, NotFound
from ...security.passwords import PasswordHasher
from ...security.tokens import Identity, TokenCodec
from .account import Account
from .contracts import DEMO_ACCOUNTS, AuthResult, NewAccount, RegisterInput

logger = logging.getLogger(__name__)


class AccountStore(Protocol):
    def exists_by_email(self, email: str) -> bool: ...

    def find_by_email(self, email: str) -> Account | None: ...

    def create_account(self, payload: NewAccount) -> Account: ...


class AccountService:
    """Registration, login and identity lookup for the account directory."""

    def __init__(self, repository: AccountStore, hasher: PasswordHasher, codec: TokenCodec) -> None:
        self._repository = repository
        self._hasher = hasher
        self._codec = codec
        # Verified against when the email is unknown so both failure paths cost a hash.
        self._dummy_hash = hasher.hash("coursehub-dummy-password")

    def register(self, payload: RegisterInput) -> AuthResult:
        """Create an account and return a token for it.

        The existence check only short-circuits the common case; a racing
        insert is still rejected by the repository's unique constraint.
        """
        if self._repository.exists_by_email(payload.email):
            raise DuplicateAccount()
        account = self._repository.create_account(
            NewAccount(
                name=payload.name,
                email=payload.email,
                password_hash=self._hasher.hash(payload.password),
            )
        )
        logger.info("account registered id=%s", account.account_id)
        return AuthResult(token=self._issue(account), account=account)

    def login(self, email: str, password: str) -> AuthResult:
        """Verify credentials; unknown email and wrong password fail identically."""
        account = self._repository.find_by_email(email)
        if account is None:
            self._hasher.verify(password, self._dummy_hash)
            raise InvalidCredentials()
        if not self._hasher.verify(password, account.password_hash):
            raise InvalidCredentials()
        logger.info("login succeeded id=%s", account.account_id)
        return AuthResult(token=self._issue(account), account=account)

    def current_user(self, identity: Identity) -> Account:
        account = self._repository.find_by_email(identity.email)
        if account is None:
            raise NotFound("User not found")
        return account

    def seed_demo_accounts(self) -> int:
        """Register each demo account whose email is still free; return how many were added."""
        created = 0
        for payload in DEMO_ACCOUNTS:
            try:
                self.register(payload)
            except DuplicateAccount:
                continue
            created += 1
        if created:
            logger.info("seeded %d demo accounts", created)
        return created

    def _issue(self, account: Account) -> str:
        return self._codec.issue(account.email, account.account_id)
