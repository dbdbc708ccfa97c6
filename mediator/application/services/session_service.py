"""
Session service orchestrator.

Creates sessions and resolves which role a caller enters as. One entry
point serves both Partner B's first join and either partner logging back in.

Dependencies: mediator.boundary.db.CRUD, mediator.configs
System role: Session Registry
"""

import logging
import re
import secrets
import string
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mediator.application.services.persistence import guard_persistence
from mediator.boundary.db.CRUD.session_context_crud import session_context_crud
from mediator.boundary.db.CRUD.session_crud import normalize_code, session_crud
from mediator.boundary.db.models.session_model import SessionModel
from mediator.configs.mediation import MediationSettings
from mediator.core.exceptions import (
    AuthenticationError,
    PersistenceError,
    SessionNotFoundError,
    ValidationError,
)
from mediator.core.roles import PartnerRole, SessionStatus

logger = logging.getLogger(__name__)

PIN_PATTERN = re.compile(r"[0-9]{4}")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")
CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_session_code(length: int = 6) -> str:
    """Random upper-case alphanumeric session code."""
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def validate_pin(pin: str | None) -> str:
    if pin is None or not PIN_PATTERN.fullmatch(pin):
        raise ValidationError("PIN must be exactly 4 digits", field="pin")
    return pin


def validate_identity(name: str | None, email: str | None) -> tuple[str, str]:
    """Return trimmed name and email, or raise ValidationError."""
    name = (name or "").strip()
    email = (email or "").strip()
    if not name:
        raise ValidationError("Name is required", field="name")
    if not email:
        raise ValidationError("Email is required", field="email")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Email address is malformed", field="email")
    return name, email


class SessionService:
    """Session service orchestrator."""

    def __init__(self, db: AsyncSession, settings: MediationSettings | None = None) -> None:
        """
        Initialize session service with async database session.

        Args:
            db: Async SQLAlchemy session
            settings: Mediation settings (code length and attempts)
        """
        self.db = db
        self.settings = settings or MediationSettings()

    @guard_persistence("create_session")
    async def create_session(self, name: str, email: str, pin: str) -> SessionModel:
        """
        Create a new session with the caller as Partner A.

        Allocates a unique code (regenerating on conflict), stores the session
        in waiting status and creates the two empty per-role context records.

        Args:
            name: Partner A display name
            email: Partner A email
            pin: 4-digit PIN

        Returns:
            SessionModel: Created session

        Raises:
            ValidationError: Empty name/email or malformed PIN
            PersistenceError: No free code found or store failure
        """
        name, email = validate_identity(name, email)
        pin = validate_pin(pin)

        for attempt in range(1, self.settings.session_code_attempts + 1):
            code = generate_session_code(self.settings.session_code_length)
            if await session_crud.code_exists(self.db, code):
                logger.info("Session code collision, regenerating", extra={"attempt": attempt})
                continue

            try:
                session = await session_crud.create(
                    self.db,
                    session_code=code,
                    partner_a_name=name,
                    partner_a_email=email,
                    partner_a_pin=pin,
                    status=SessionStatus.WAITING,
                )
                await session_context_crud.create_for_roles(self.db, session.id)
                await self.db.commit()
            except IntegrityError:
                # Another session took the code between the check and the insert
                await self.db.rollback()
                logger.info("Session code taken concurrently, regenerating", extra={"attempt": attempt})
                continue

            logger.info(
                "Session created",
                extra={"session_id": str(session.id), "session_code": session.session_code},
            )
            return session

        raise PersistenceError("Could not allocate a unique session code", operation="create_session")

    @guard_persistence("join_or_login")
    async def join_or_login(
        self,
        code: str,
        pin: str,
        name: str | None = None,
        email: str | None = None,
    ) -> tuple[SessionModel, PartnerRole]:
        """
        Enter a session by code and PIN.

        Resolution order, first match wins:
        1. PIN matches Partner A -> partner_a
        2. Partner B registered and PIN matches B -> partner_b
        3. Partner B not registered -> register B with name/email/PIN -> partner_b
        4. Otherwise AuthenticationError

        Returns:
            (SessionModel, PartnerRole): Session and the resolved role

        Raises:
            ValidationError: Missing code, malformed PIN, or missing B details on first join
            SessionNotFoundError: Unknown code
            AuthenticationError: PIN matches neither partner
        """
        if not code or not code.strip():
            raise ValidationError("Session code is required", field="code")
        pin = validate_pin(pin)

        session = await session_crud.get_by_code(self.db, code)
        if session is None:
            raise SessionNotFoundError(normalize_code(code))

        if pin == session.partner_a_pin:
            return session, PartnerRole.PARTNER_A

        if session.partner_b_ready:
            if pin == session.partner_b_pin:
                return session, PartnerRole.PARTNER_B
            logger.info("PIN rejected", extra={"session_id": str(session.id)})
            raise AuthenticationError(details={"session_code": session.session_code})

        name, email = validate_identity(name, email)
        registered = await session_crud.register_partner_b(self.db, session.id, name, email, pin)
        await self.db.commit()
        session = await session_crud.get_by_id(self.db, session.id, fresh=True)

        if not registered and session.partner_b_pin != pin:
            # Someone else registered as Partner B first
            logger.info("Partner B registered concurrently", extra={"session_id": str(session.id)})
            raise AuthenticationError(details={"session_code": session.session_code})

        if registered:
            logger.info("Partner B joined", extra={"session_id": str(session.id)})
        return session, PartnerRole.PARTNER_B

    @guard_persistence("get_session")
    async def get_session(self, session_id: UUID) -> SessionModel:
        """
        Get session by ID, re-read from the store.

        Raises:
            SessionNotFoundError: If session not found
        """
        session = await session_crud.get_by_id(self.db, session_id, fresh=True)
        if session is None:
            raise SessionNotFoundError(str(session_id))
        return session

    async def authorize_role(self, session_id: UUID, role: PartnerRole, pin: str | None) -> SessionModel:
        """
        Check that the PIN belongs to the role within this session.

        Raises:
            SessionNotFoundError: Unknown session
            AuthenticationError: Role not registered or PIN mismatch
        """
        session = await self.get_session(session_id)
        expected = session.pin_for(role)
        if expected is None or pin != expected:
            raise AuthenticationError(details={"session_id": str(session_id), "role": role.value})
        return session
