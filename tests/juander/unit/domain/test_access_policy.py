"""Unit tests for AccessPolicy."""

from juander.domain.user import AccessPolicy, User, UserRole

SUPER_ADMIN_EMAIL = "root@juander.test"


class TestAccessPolicy:
    def setup_method(self):
        self.policy = AccessPolicy(super_admin_email=SUPER_ADMIN_EMAIL)

    def test_tourist_has_no_admin_access(self):
        assert self.policy.has_admin_access(User("t@example.com")) is False

    def test_admin_role_grants_admin_access(self):
        user = User("a@example.com", role=UserRole.ADMIN)

        assert self.policy.has_admin_access(user) is True
        assert self.policy.is_super_admin(user) is False

    def test_super_admin_has_access_regardless_of_stored_role(self):
        user = User(SUPER_ADMIN_EMAIL, role=UserRole.TOURIST)

        assert self.policy.is_super_admin(user) is True
        assert self.policy.has_admin_access(user) is True

    def test_super_admin_email_match_is_exact(self):
        assert self.policy.is_super_admin(User("Root@juander.test")) is False

    def test_initial_role(self):
        assert self.policy.initial_role_for(SUPER_ADMIN_EMAIL) == UserRole.ADMIN
        assert self.policy.initial_role_for("t@example.com") == UserRole.TOURIST

    def test_empty_configuration_disables_super_admin(self):
        policy = AccessPolicy(super_admin_email="")

        assert policy.is_super_admin_email("") is False
        assert policy.initial_role_for("root@juander.test") == UserRole.TOURIST
