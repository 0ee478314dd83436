# SPDX-License-Identifier: MIT

import os
import unittest
from unittest import mock

from oauthcord import Client, ClientConfig, OAuth2Token, ValidationError

from tests.helpers import API, OAuthcordTestCase, SpyTransport, make_client, run_suite


def token_payload(access, refresh="refresh", expires_in=604800):
    return {
        "access_token": access,
        "token_type": "Bearer",
        "expires_in": expires_in,
        "refresh_token": refresh,
        "scope": "identify guilds",
    }


class OAuth2TokenTestSuite(unittest.TestCase):
    """Tests for the token wrapper."""

    def test_fields(self):
        token = OAuth2Token(token_payload("abc"))
        self.assertEqual(token.access_token, "abc")
        self.assertEqual(token.refresh_token, "refresh")
        self.assertEqual(token.scopes, ["identify", "guilds"])
        self.assertFalse(token.expired)
        self.assertEqual(token.get_auth_header(), {"Authorization": "Bearer abc"})

    def test_expired(self):
        self.assertTrue(OAuth2Token(token_payload("abc", expires_in=-1)).expired)
        self.assertFalse(OAuth2Token({"access_token": "abc", "token_type": "Bearer"}).expired)

    def test_from_payload(self):
        self.assertIsNone(OAuth2Token.from_payload({"error": "invalid_grant"}))
        self.assertIsNone(OAuth2Token.from_payload([]))
        self.assertEqual(OAuth2Token.from_payload(token_payload("x")).access_token, "x")

    def test_webhook(self):
        self.assertIsNone(OAuth2Token(token_payload("abc")).webhook)
        hook = {"id": "9", "type": 1, "token": "hook-token", "channel_id": "5", "name": "Alerts"}
        token = OAuth2Token(dict(token_payload("abc"), scope="webhook.incoming", webhook=hook))
        self.assertEqual(token.webhook["token"], "hook-token")
        self.assertEqual(token.scopes, ["webhook.incoming"])


class SessionTestSuite(OAuthcordTestCase):
    """Tests for per-user sessions."""

    async def test_sessions_do_not_share_tokens(self):
        client, transport = make_client()
        client.set_access_token("client-token")
        alice = client.session(OAuth2Token(token_payload("alice")))
        bob = client.session(OAuth2Token(token_payload("bob")))

        await alice.fetch_user()
        await bob.fetch_guilds()
        await client.resources.call("get_current_user")

        self.assertEqual(
            [c.headers["Authorization"] for c in transport.calls],
            ["Bearer alice", "Bearer bob", "Bearer client-token"],
        )
        self.assertEqual(transport.calls[1].url, f"{API}/users/@me/guilds")

    async def test_login_keeps_the_token(self):
        client, transport = make_client((200, token_payload("fresh")))
        session = client.session()
        await session.login("code")

        self.assertEqual(session.token.access_token, "fresh")
        await session.fetch_connections()
        self.assertEqual(transport.last.headers["Authorization"], "Bearer fresh")
        self.assertEqual(client.credentials.access_token, "")

    async def test_failed_login_keeps_previous_token(self):
        client, _ = make_client((400, {"error": "invalid_grant"}))
        session = client.session(OAuth2Token(token_payload("old")))
        result = await session.login("bad")

        self.assertTrue(result.is_error)
        self.assertEqual(session.token.access_token, "old")

    async def test_refresh(self):
        client, transport = make_client((200, token_payload("new", refresh="r2")))
        session = client.session(OAuth2Token(token_payload("old", refresh="r1")))
        await session.refresh(["identify", "guilds"])

        form = transport.last.form()
        self.assertEqual(form["refresh_token"], "r1")
        self.assertEqual(form["scope"], "identify guilds")
        self.assertEqual(session.token.refresh_token, "r2")
        self.assertEqual(session.http.credentials.access_token, "new")

    async def test_refresh_without_refresh_token(self):
        client, transport = make_client()
        result = await client.session().refresh("identify")
        self.assertIsInstance(result, ValidationError)
        self.assertEqual(result, "The session has no refresh token.")

        result = await client.session(OAuth2Token({"access_token": "a", "token_type": "Bearer"})).refresh("identify")
        self.assertIsInstance(result, ValidationError)
        self.assertEqual(transport.calls, [])

    async def test_check_and_guild_member(self):
        client, transport = make_client()
        session = client.session(OAuth2Token(token_payload("tok")))
        await session.check()
        self.assertEqual(transport.last.url, f"{API}/oauth2/@me")
        await session.fetch_guild_member(55)
        self.assertEqual(transport.last.url, f"{API}/users/@me/guilds/55/member")

    async def test_join_guild(self):
        client, transport = make_client()
        session = client.session(OAuth2Token(token_payload("tok")))
        await session.join_guild(1, 2, nick="Nick")

        call = transport.last
        self.assertEqual(call.method, "PUT")
        self.assertEqual(call.json(), {"access_token": "tok", "nick": "Nick"})
        self.assertEqual(call.headers["Authorization"], "Bot bot-token")

        self.assertIsInstance(await client.session().join_guild(1, 2), ValidationError)

    async def test_revoke_clears_the_token(self):
        client, transport = make_client((200, b""))
        session = client.session(OAuth2Token(token_payload("tok")))
        await session.revoke()

        self.assertIsNone(session.token)
        self.assertEqual(session.http.credentials.access_token, "")
        self.assertEqual(transport.last.form()["token"], "tok")


class ClientTestSuite(OAuthcordTestCase):
    """Tests for the client facade and its configuration."""

    def test_config_from_mapping(self):
        config = ClientConfig.from_env({
            "DISCORD_CLIENT_ID": "42",
            "DISCORD_CLIENT_SECRET": "secret",
            "DISCORD_REDIRECT_URI": "https://example.com/cb",
            "DISCORD_BOT_TOKEN": "bot",
        })
        self.assertEqual(config.client_id, 42)
        self.assertEqual(config.api_base, API)

    def test_config_requires_every_value(self):
        with self.assertRaises(KeyError):
            ClientConfig.from_env({"DISCORD_CLIENT_ID": "42"})

    async def test_from_env(self):
        environ = {
            "DISCORD_CLIENT_ID": "42",
            "DISCORD_CLIENT_SECRET": "secret",
            "DISCORD_REDIRECT_URI": "https://example.com/cb",
            "DISCORD_BOT_TOKEN": "bot",
            "DISCORD_API_URL": "http://localhost:9000/api",
        }
        transport = SpyTransport()
        with mock.patch.dict(os.environ, environ):
            client = Client.from_env(transport=transport)

        await client.resources.call("get_channel", channel_id=3)
        self.assertEqual(transport.last.url, "http://localhost:9000/api/channels/3")
        self.assertEqual(transport.last.headers["Authorization"], "Bot bot")
        self.assertEqual(client.credentials.application.client_id, 42)

    async def test_context_manager_closes_transport(self):
        client, transport = make_client()
        async with client as entered:
            self.assertIs(entered, client)
        self.assertTrue(transport.closed)

    def test_scope_helpers(self):
        client, _ = make_client()
        self.assertTrue(client.is_valid_scope("identify"))
        self.assertIn("guilds.join", client.list_valid_scopes())


if __name__ == "__main__":
    run_suite(OAuth2TokenTestSuite, SessionTestSuite, ClientTestSuite)
