"""Unit tests for privilege computation."""

from iam.application.authorization import (
    AuthorizationResolver,
    is_admin_email,
    is_domain_allowed,
    workspace_access_granted,
    workspace_manager_granted,
)
from iam.application.value_objects import AuthorizationConfig
from iam.domain.value_objects import TeamMemberRole


class TestIsAdminEmail:
    """Tests for is_admin_email."""

    def test_case_insensitive_match(self):
        """Admin list matching ignores case and whitespace."""
        assert is_admin_email("Root@Voqa.com", " root@voqa.com , other@x.com")

    def test_not_listed(self):
        """Unlisted emails are not admins."""
        assert not is_admin_email("eve@voqa.com", "root@voqa.com")

    def test_empty_list(self):
        """An unset list has no admins."""
        assert not is_admin_email("root@voqa.com", None)


class TestIsDomainAllowed:
    """Tests for is_domain_allowed."""

    def test_allowed(self):
        """Domain match is case-insensitive on both sides."""
        assert is_domain_allowed("alice@KubaPay.com", ["KUBAPAY.com"])

    def test_not_allowed(self):
        """Other domains are rejected."""
        assert not is_domain_allowed("alice@gmail.com", ["kubapay.com"])

    def test_no_domain(self):
        """Addresses without a domain are never allowed."""
        assert not is_domain_allowed("alice", ["kubapay.com", ""])

    def test_subdomain_is_not_allowed(self):
        """Only exact domain matches count."""
        assert not is_domain_allowed("alice@eng.kubapay.com", ["kubapay.com"])


class TestWorkspaceRules:
    """Tests for workspace access and manager rules."""

    def test_super_admin_has_access(self, make_workspace):
        """Super admins reach any workspace."""
        workspace = make_workspace(manager_email="alice@kubapay.com")
        assert workspace_access_granted("root@voqa.com", True, workspace, [])

    def test_manager_has_access(self, make_workspace):
        """The manager reaches their workspace even outside the set."""
        workspace = make_workspace(manager_email="alice@kubapay.com")
        assert workspace_access_granted("ALICE@kubapay.com", False, workspace, [])

    def test_member_has_access_through_set(self, make_workspace):
        """Membership is expressed through the resolved workspace set."""
        workspace = make_workspace(workspace_id="ws_1")
        assert workspace_access_granted("bob@kubapay.com", False, workspace, ["ws_1"])

    def test_outsider_has_no_access(self, make_workspace):
        """Anyone else is denied."""
        workspace = make_workspace(workspace_id="ws_1")
        assert not workspace_access_granted(
            "eve@kubapay.com", False, workspace, ["ws_2"]
        )

    def test_manager_rule(self, make_workspace):
        """Only the manager or a super admin manage a workspace."""
        workspace = make_workspace(manager_email="alice@kubapay.com")
        assert workspace_manager_granted("alice@kubapay.com", False, workspace)
        assert workspace_manager_granted("root@voqa.com", True, workspace)
        assert not workspace_manager_granted("bob@kubapay.com", False, workspace)


class TestAuthorizationResolver:
    """Tests for AuthorizationResolver."""

    def test_admin_by_role(self, make_team_member):
        """The admin role alone grants the admin flag."""
        resolver = AuthorizationResolver(AuthorizationConfig.from_lists())
        assert resolver.is_admin(make_team_member(role=TeamMemberRole.ADMIN))

    def test_admin_by_list(self, make_team_member):
        """Listed emails are admins regardless of role."""
        resolver = AuthorizationResolver(
            AuthorizationConfig.from_lists(admin_emails="Alice@KubaPay.com")
        )
        assert resolver.is_admin(make_team_member(email="alice@kubapay.com"))

    def test_admin_role_does_not_imply_super_admin(self, make_team_member):
        """The two privilege flags are independent."""
        resolver = AuthorizationResolver(
            AuthorizationConfig.from_lists(super_admin_emails="root@voqa.com")
        )
        member = make_team_member(role=TeamMemberRole.ADMIN)

        assert resolver.is_admin(member)
        assert not resolver.is_super_admin(member.email)

    def test_super_admin_without_admin(self, make_team_member):
        """A super admin is not automatically a single-tenant admin."""
        resolver = AuthorizationResolver(
            AuthorizationConfig.from_lists(
                admin_emails="other@voqa.com", super_admin_emails="root@voqa.com"
            )
        )
        member = make_team_member(email="root@voqa.com")

        assert resolver.is_super_admin("ROOT@voqa.com")
        assert not resolver.is_admin(member)

    def test_is_domain_allowed_uses_config(self):
        """Domain checks use the configured allow-list."""
        resolver = AuthorizationResolver(
            AuthorizationConfig.from_lists(allowed_domains="example.org")
        )
        assert resolver.is_domain_allowed("a@example.org")
        assert not resolver.is_domain_allowed("a@kubapay.com")
