import itertools

import pytest

from use_cases import route_policy
from use_cases.route_policy import AccessOutcome
from use_cases.session_models import ROLES, StoredCredentials, redirect_for_role


@pytest.mark.parametrize("required_role", list(ROLES) + [None])
def test_no_token_always_redirects_to_login(required_role):
    outcome = route_policy.decide(required_role, None)
    assert outcome is AccessOutcome.REDIRECT_LOGIN
    assert outcome.target == "/login"


@pytest.mark.parametrize("role,required_role", [(r, rr) for r, rr in itertools.product(ROLES, ROLES) if r != rr])
def test_role_mismatch_redirects_home(role, required_role):
    creds = StoredCredentials(token="abc", role=role)
    outcome = route_policy.decide(required_role, creds)
    assert outcome is AccessOutcome.REDIRECT_HOME
    assert outcome.target == "/"


@pytest.mark.parametrize("role", ROLES)
def test_matching_role_is_allowed(role):
    creds = StoredCredentials(token="abc", role=role)
    assert route_policy.decide(role, creds) is AccessOutcome.ALLOW
    assert AccessOutcome.ALLOW.target is None


def test_token_without_role_requirement_is_allowed():
    creds = StoredCredentials(token="abc", role=None)
    assert route_policy.decide(None, creds) is AccessOutcome.ALLOW
    assert route_policy.decide(route_policy.ANY_ROLE, creds) is AccessOutcome.ALLOW


def test_unmapped_role_does_not_crash_routing():
    creds = StoredCredentials(token="abc", role="ghost")
    assert route_policy.decide("admin", creds) is AccessOutcome.REDIRECT_HOME
    assert redirect_for_role("ghost") == "/login"
    assert redirect_for_role(None) == "/login"


@pytest.mark.parametrize("role,path", [
    ("admin", "/admin_dashboard"),
    ("amateur", "/beginner_dashboard"),
    ("professional", "/professional_dashboard"),
    ("institution", "/institut_dashboard"),
])
def test_redirect_map_lands_on_an_allowed_route(role, path):
    assert redirect_for_role(role) == path
    assert route_policy.can_open(path, StoredCredentials(token="abc", role=role))


def test_can_open_rejects_unknown_paths():
    assert route_policy.can_open("/nowhere", StoredCredentials(token="abc", role="admin")) is False
    assert route_policy.can_open("/signup", None) is True
