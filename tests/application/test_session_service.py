"""
Test suite for SessionService.

Covers session creation, Partner B's first join, PIN-based role resolution
and input validation against an in-memory database.

System role: Verification of the session registry
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from mediator.application.services import session_service as session_service_module
from mediator.application.services.session_service import (
    SessionService,
    generate_session_code,
    validate_identity,
    validate_pin,
)
from mediator.boundary.db.CRUD.session_context_crud import session_context_crud
from mediator.boundary.db.CRUD.session_crud import session_crud
from mediator.boundary.db.models.session_model import SessionModel
from mediator.configs.mediation import MediationSettings
from mediator.core.exceptions import (
    AuthenticationError,
    PersistenceError,
    SessionNotFoundError,
    ValidationError,
)
from mediator.core.roles import PartnerRole, SessionStatus


@pytest.fixture
def session_service(test_async_db: AsyncSession) -> SessionService:
    """Provide SessionService on the test database."""
    return SessionService(test_async_db)


class TestValidation:
    """Test suite for module-level input checks."""

    @pytest.mark.parametrize("pin", ["1234", "0000"])
    def test_valid_pins(self, pin: str) -> None:
        assert validate_pin(pin) == pin

    @pytest.mark.parametrize("pin", [None, "", "123", "12345", "12a4", " 1234", "1234\n", "١٢٣٤"])
    def test_invalid_pins_should_raise(self, pin) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_pin(pin)

        assert exc_info.value.field == "pin"

    def test_identity_should_be_trimmed(self) -> None:
        assert validate_identity("  Alex ", " alex@example.com ") == ("Alex", "alex@example.com")

    @pytest.mark.parametrize(
        "name,email,field",
        [
            ("", "alex@example.com", "name"),
            ("   ", "alex@example.com", "name"),
            ("Alex", "", "email"),
            ("Alex", "not-an-email", "email"),
        ],
    )
    def test_missing_identity_should_raise(self, name: str, email: str, field: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_identity(name, email)

        assert exc_info.value.field == field

    def test_generated_codes_are_upper_alphanumeric(self) -> None:
        code = generate_session_code(6)

        assert len(code) == 6
        assert code == code.upper()
        assert code.isalnum()


class TestCreateSession:
    """Test suite for SessionService.create_session()."""

    @pytest.mark.asyncio
    async def test_should_create_waiting_session_with_contexts(
        self, session_service: SessionService, test_async_db: AsyncSession
    ) -> None:
        # Act
        session = await session_service.create_session("Alex", "alex@example.com", "1111")

        # Assert
        assert len(session.session_code) == 6
        assert session.status == SessionStatus.WAITING
        assert session.partner_a_name == "Alex"
        assert session.partner_b_ready is False
        contexts = await session_context_crud.get_for_session(test_async_db, session.id)
        assert len(contexts) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pin", ["11", "1111\n", "11111"])
    async def test_invalid_pin_should_store_nothing(
        self, session_service: SessionService, test_async_db: AsyncSession, pin: str
    ) -> None:
        with pytest.raises(ValidationError):
            await session_service.create_session("Alex", "alex@example.com", pin)

        assert await session_crud.get_all(test_async_db) == []

    @pytest.mark.asyncio
    async def test_code_collision_should_regenerate(
        self,
        session_service: SessionService,
        waiting_session: SessionModel,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        # Arrange
        codes = iter([waiting_session.session_code, "NEW123"])
        monkeypatch.setattr(session_service_module, "generate_session_code", lambda length: next(codes))

        # Act
        session = await session_service.create_session("Jo", "jo@example.com", "2222")

        # Assert
        assert session.session_code == "NEW123"

    @pytest.mark.asyncio
    async def test_exhausted_code_attempts_should_raise(
        self,
        test_async_db: AsyncSession,
        waiting_session: SessionModel,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        # Arrange
        service = SessionService(test_async_db, settings=MediationSettings(session_code_attempts=2))
        monkeypatch.setattr(
            session_service_module,
            "generate_session_code",
            MagicMock(return_value=waiting_session.session_code),
        )

        # Act & Assert
        with pytest.raises(PersistenceError):
            await service.create_session("Jo", "jo@example.com", "2222")


class TestJoinOrLogin:
    """Test suite for SessionService.join_or_login()."""

    @pytest.mark.asyncio
    async def test_full_entry_scenario(
        self, session_service: SessionService, waiting_session: SessionModel
    ) -> None:
        """Alex creates, Sam joins with a lower-case code, both log back in, a wrong PIN is refused."""
        code = waiting_session.session_code

        # Sam joins
        session, role = await session_service.join_or_login(
            code.lower(), "9999", name="Sam", email="sam@example.com"
        )
        assert role is PartnerRole.PARTNER_B
        assert session.status == SessionStatus.ACTIVE
        assert session.partner_b_name == "Sam"
        assert session.partner_b_ready is True

        # Logins
        _, role_a = await session_service.join_or_login(code, "1111")
        _, role_b = await session_service.join_or_login(f"  {code} ", "9999")
        assert role_a is PartnerRole.PARTNER_A
        assert role_b is PartnerRole.PARTNER_B

        # Wrong PIN
        with pytest.raises(AuthenticationError):
            await session_service.join_or_login(code, "5555")

    @pytest.mark.asyncio
    async def test_partner_a_pin_should_win_before_b_joins(
        self, session_service: SessionService, waiting_session: SessionModel
    ) -> None:
        # Act
        session, role = await session_service.join_or_login(
            waiting_session.session_code, "1111", name="Sam", email="sam@example.com"
        )

        # Assert
        assert role is PartnerRole.PARTNER_A
        assert session.partner_b_ready is False

    @pytest.mark.asyncio
    async def test_first_join_without_details_should_raise(
        self, session_service: SessionService, waiting_session: SessionModel
    ) -> None:
        with pytest.raises(ValidationError):
            await session_service.join_or_login(waiting_session.session_code, "9999")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pin", ["99999", "9999\n"])
    async def test_first_join_with_malformed_pin_should_not_register(
        self, session_service: SessionService, waiting_session: SessionModel, pin: str
    ) -> None:
        with pytest.raises(ValidationError):
            await session_service.join_or_login(
                waiting_session.session_code, pin, name="Sam", email="sam@example.com"
            )

        stored = await session_service.get_session(waiting_session.id)
        assert stored.partner_b_ready is False
        assert stored.partner_b_pin is None

    @pytest.mark.asyncio
    async def test_unknown_code_should_raise_not_found(
        self, session_service: SessionService, waiting_session: SessionModel
    ) -> None:
        with pytest.raises(SessionNotFoundError):
            await session_service.join_or_login("ZZZZZZ", "1111")

    @pytest.mark.asyncio
    async def test_blank_code_should_raise_validation(self, session_service: SessionService) -> None:
        with pytest.raises(ValidationError):
            await session_service.join_or_login("   ", "1111")

    @pytest.mark.asyncio
    async def test_losing_registration_race_should_raise(
        self,
        session_service: SessionService,
        waiting_session: SessionModel,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        # Arrange
        register = session_crud.register_partner_b

        async def rival_registers_first(db, id, name, email, pin):
            await register(db, id, "Rival", "rival@example.com", "4242")
            return await register(db, id, name, email, pin)

        monkeypatch.setattr(session_crud, "register_partner_b", rival_registers_first)

        # Act & Assert
        with pytest.raises(AuthenticationError):
            await session_service.join_or_login(
                waiting_session.session_code, "9999", name="Sam", email="sam@example.com"
            )
        current = await session_service.get_session(waiting_session.id)
        assert current.partner_b_name == "Rival"

    @pytest.mark.asyncio
    async def test_losing_race_with_same_pin_should_enter_as_b(
        self,
        session_service: SessionService,
        waiting_session: SessionModel,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        register = session_crud.register_partner_b

        async def rival_registers_first(db, id, name, email, pin):
            await register(db, id, "Rival", "rival@example.com", pin)
            return await register(db, id, name, email, pin)

        monkeypatch.setattr(session_crud, "register_partner_b", rival_registers_first)

        session, role = await session_service.join_or_login(
            waiting_session.session_code, "9999", name="Sam", email="sam@example.com"
        )

        assert role is PartnerRole.PARTNER_B
        assert session.partner_b_name == "Rival"


class TestAuthorizeRole:
    """Test suite for SessionService.authorize_role()."""

    @pytest.mark.asyncio
    async def test_matching_pins_should_pass(
        self, session_service: SessionService, active_session: SessionModel
    ) -> None:
        session = await session_service.authorize_role(active_session.id, PartnerRole.PARTNER_B, "9999")

        assert session.id == active_session.id

    @pytest.mark.asyncio
    async def test_other_partners_pin_should_fail(
        self, session_service: SessionService, active_session: SessionModel
    ) -> None:
        with pytest.raises(AuthenticationError):
            await session_service.authorize_role(active_session.id, PartnerRole.PARTNER_B, "1111")

    @pytest.mark.asyncio
    async def test_unregistered_b_should_fail(
        self, session_service: SessionService, waiting_session: SessionModel
    ) -> None:
        with pytest.raises(AuthenticationError):
            await session_service.authorize_role(waiting_session.id, PartnerRole.PARTNER_B, None)

    @pytest.mark.asyncio
    async def test_unknown_session_should_raise_not_found(
        self, session_service: SessionService, session_id
    ) -> None:
        with pytest.raises(SessionNotFoundError):
            await session_service.get_session(session_id)
