import pytest
from yummio.models import StoredUser
from yummio.services.auth_service import InMemoryUserRepository, AuthService


class TestSignIn:

    def test_demo_user_signs_in(self, auth_service):
        result = auth_service.sign_in("demo@yummio.com", "password123")
        assert result.success
        assert result.user.name == "Demo User"
        assert result.token
        assert auth_service.current_user(result.token) == result.user

    def test_email_is_case_insensitive(self, auth_service):
        assert auth_service.sign_in("Sarah@Yummio.com", "chef2024").success

    def test_wrong_password(self, auth_service):
        result = auth_service.sign_in("demo@yummio.com", "nope123")
        assert not result.success
        assert result.error_code == "INVALID_CREDENTIALS"
        assert result.error == "Invalid email or password"
        assert result.token is None
        assert auth_service.sessions == {}

    @pytest.mark.parametrize("email, password", [("", "password123"), ("demo@yummio.com", "")])
    def test_missing_fields(self, auth_service, email, password):
        result = auth_service.sign_in(email, password)
        assert result.error == "Please fill in all fields"

    def test_invalid_email(self, auth_service):
        result = auth_service.sign_in("demo.yummio.com", "password123")
        assert result.error_code == "INVALID_EMAIL"

    def test_password_never_returned(self, auth_service):
        result = auth_service.sign_in("demo@yummio.com", "password123")
        assert "password" not in result.model_dump()["user"]


class TestSignUp:

    def test_creates_account(self, auth_service):
        result = auth_service.sign_up("  New Cook ", "New@Example.com", "secret1")
        assert result.success
        assert result.user.name == "New Cook"
        assert result.user.email == "new@example.com"
        assert auth_service.sign_in("new@example.com", "secret1").success

    def test_short_password(self, auth_service):
        result = auth_service.sign_up("Cook", "cook@example.com", "12345")
        assert result.error_code == "WEAK_PASSWORD"
        assert result.error == "Password must be at least 6 characters long"

    def test_duplicate_email(self, auth_service):
        result = auth_service.sign_up("Again", "DEMO@yummio.com", "password123")
        assert result.error_code == "EMAIL_EXISTS"

    def test_missing_name(self, auth_service):
        assert auth_service.sign_up("", "cook@example.com", "secret1").error_code == "MISSING_FIELDS"

    def test_repositories_are_isolated(self):
        first = AuthService(InMemoryUserRepository())
        second = AuthService(InMemoryUserRepository())
        first.sign_up("Cook", "cook@example.com", "secret1")
        assert second.repository.find_by_email("cook@example.com") is None


class TestResetAndSignOut:

    def test_reset_known_email(self, auth_service):
        assert auth_service.reset_password("demo@yummio.com").success

    def test_reset_unknown_email(self, auth_service):
        result = auth_service.reset_password("ghost@example.com")
        assert result.error_code == "ACCOUNT_NOT_FOUND"
        assert result.error == "No account found with this email address"

    def test_reset_empty_email(self, auth_service):
        assert auth_service.reset_password("").error == "Please enter your email address"

    def test_sign_out_clears_user(self, auth_service):
        token = auth_service.sign_in("demo@yummio.com", "password123").token
        assert auth_service.sign_out(token)
        assert auth_service.current_user(token) is None
        assert not auth_service.sign_out(token)

    def test_unknown_token_has_no_user(self, auth_service):
        assert auth_service.current_user(None) is None
        assert auth_service.current_user("not-a-token") is None
        assert not auth_service.sign_out(None)

    def test_sessions_are_independent(self, auth_service):
        demo = auth_service.sign_in("demo@yummio.com", "password123").token
        sarah = auth_service.sign_in("sarah@yummio.com", "chef2024").token
        assert demo != sarah

        auth_service.sign_out(demo)
        assert auth_service.current_user(demo) is None
        assert auth_service.current_user(sarah).name == "Chef Sarah"

    def test_sign_up_opens_session(self, auth_service):
        result = auth_service.sign_up("Cook", "cook@example.com", "secret1")
        assert auth_service.current_user(result.token).email == "cook@example.com"

    def test_custom_seed(self):
        repo = InMemoryUserRepository(seed=[
            StoredUser(id="9", name="Only", email="only@example.com", password="only123")
        ])
        service = AuthService(repo)
        assert not service.sign_in("demo@yummio.com", "password123").success
        assert service.sign_in("only@example.com", "only123").success
