"""Tests for Authorizer."""

import pytest

from commandbot.core.commands.authorizer import Authorizer


class TestAuthorizer:
    """Tests for Authorizer."""

    @pytest.mark.parametrize(
        "agent_public, command_public, sender, expected",
        [
            (False, False, "UMASTER", True),
            (False, True, "UMASTER", True),
            (True, False, "UMASTER", True),
            (True, True, "UMASTER", True),
            (False, False, "USTRANGER", False),
            (False, True, "USTRANGER", False),
            (True, False, "USTRANGER", False),
            (True, True, "USTRANGER", True),
        ],
    )
    def test_authorization_matrix(self, make_command, agent_public, command_public, sender, expected):
        authorizer = Authorizer(["UMASTER"], agent_is_public=agent_public)
        command = make_command("rand", r"^rand$", is_public=command_public)
        assert authorizer.authorized(sender, command) is expected

    def test_masters_are_ordered_and_deduplicated(self):
        authorizer = Authorizer(["U2", "U1", "U2"])
        assert authorizer.masters == ("U2", "U1")
        assert authorizer.is_master("U1")
        assert not authorizer.is_master("U3")

    def test_every_master_is_authorized(self, make_command):
        authorizer = Authorizer(["U1", "U2"], agent_is_public=False)
        command = make_command("secret", r"^secret$")
        assert authorizer.authorized("U1", command)
        assert authorizer.authorized("U2", command)
