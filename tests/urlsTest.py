# SPDX-License-Identifier: MIT

import unittest
from urllib.parse import parse_qsl, urlsplit

from oauthcord import InvalidArgument, urls

from tests.helpers import API, run_suite


def decompose(url):
    """Split a resource URL back into collection, id, subpath and query."""
    parts = urlsplit(url)
    base_path = urlsplit(urls.DISCORD_API_URL).path
    segments = parts.path[len(base_path):].strip("/").split("/")
    collection = segments[0]
    id = int(segments[1]) if len(segments) > 1 and segments[1].isdigit() else 0
    subpath = "/".join(segments[2:])
    return collection, id, subpath, parse_qsl(parts.query)


class ResourceUrlTestSuite(unittest.TestCase):
    """Tests for resource URL composition."""

    def test_round_trip(self):
        url = urls.resource_url("guilds", 42, "channels")
        self.assertEqual(url, f"{API}/guilds/42/channels")
        self.assertEqual(decompose(url), ("guilds", 42, "channels", []))

    def test_zero_equivalent_parts_are_omitted(self):
        self.assertEqual(urls.resource_url("users"), f"{API}/users")
        self.assertEqual(urls.resource_url("users", 0, ""), f"{API}/users")
        self.assertEqual(urls.resource_url("users", None), f"{API}/users")
        self.assertEqual(urls.resource_url("guilds", 0, "channels"), f"{API}/guilds/channels")
        self.assertEqual(urls.resource_url("users", "@me", "guilds"), f"{API}/users/@me/guilds")

    def test_query_keeps_order_and_skips_none(self):
        url = urls.resource_url("guilds", 1, "members", [("limit", 10), ("after", None), ("with_counts", True)])
        self.assertEqual(url, f"{API}/guilds/1/members?limit=10&with_counts=true")

    def test_query_values_are_encoded(self):
        self.assertEqual(urls.encode_query([("q", "a b&c")]), "q=a%20b%26c")
        self.assertEqual(urls.encode_query({"flag": False}), "flag=false")
        self.assertEqual(urls.encode_query(None), "")

    def test_custom_base(self):
        self.assertEqual(urls.resource_url("channels", 5, base="http://localhost:8080/api/"), "http://localhost:8080/api/channels/5")

    def test_expand_path(self):
        template = "guilds/{guild_id}/members/{user_id}/roles/{role_id}"
        self.assertEqual(urls.expand_path(template, {"guild_id": 1, "user_id": 2, "role_id": 3}), "guilds/1/members/2/roles/3")
        self.assertEqual(urls.expand_path("guilds/{guild_id}/bans/{user_id}", {"guild_id": 1}), "guilds/1/bans")
        self.assertEqual(urls.expand_path("guilds/{guild_id}", {"guild_id": 0}), "guilds")
        self.assertEqual(urls.expand_path("webhooks/{webhook_id}/{webhook_token}", {"webhook_id": 9, "webhook_token": "a/b"}), "webhooks/9/a%2Fb")

    def test_expand_path_drops_only_trailing_zero_segments(self):
        template = "guilds/{guild_id}/members/{user_id}/roles/{role_id}"
        self.assertEqual(urls.expand_path(template, {"guild_id": 1, "user_id": 2, "role_id": 0}), "guilds/1/members/2/roles")
        for params in ({"guild_id": 1}, {"guild_id": 1, "user_id": 0, "role_id": 3}, {"guild_id": "", "user_id": 2, "role_id": 3}):
            with self.subTest(params=params):
                with self.assertRaises(InvalidArgument):
                    urls.expand_path(template, params)
        with self.assertRaises(InvalidArgument):
            urls.expand_path("webhooks/{webhook_id}/{webhook_token}", {"webhook_id": 0, "webhook_token": "tok"})
        with self.assertRaises(InvalidArgument):
            urls.expand_path("guilds/{guild_id}/widget.png", {"guild_id": 0})

    def test_path_placeholders(self):
        self.assertEqual(urls.path_placeholders("webhooks/{webhook_id}/{webhook_token}"), ["webhook_id", "webhook_token"])
        self.assertEqual(urls.path_placeholders("users/@me"), [])


class OAuthUrlTestSuite(unittest.TestCase):
    """Tests for the OAuth2 endpoint URLs."""

    def test_token_endpoints(self):
        self.assertEqual(urls.token_url(), f"{API}/oauth2/token")
        self.assertEqual(urls.revoke_url(), f"{API}/oauth2/token/revoke")
        self.assertEqual(urls.token_info_url(), f"{API}/oauth2/@me")
        self.assertEqual(urls.application_url(), f"{API}/oauth2/applications/@me")

    def test_authorize_url_encodes_once(self):
        url = urls.authorize_url(99, "https://example.com/cb?x=1", "identify%20email", "a b")
        self.assertEqual(
            url,
            "https://discord.com/oauth2/authorize?client_id=99"
            "&redirect_uri=https%3A%2F%2Fexample.com%2Fcb%3Fx%3D1"
            "&response_type=code&scope=identify%20email&state=a%20b",
        )
        self.assertNotIn("%2520", url)

    def test_implicit_grant_url(self):
        self.assertEqual(
            urls.implicit_grant_url(99, "identify", "xyz"),
            "https://discord.com/oauth2/authorize?response_type=token&client_id=99&state=xyz&scope=identify",
        )

    def test_bot_authorize_url(self):
        self.assertEqual(
            urls.bot_authorize_url(99, "bot", 8),
            "https://discord.com/oauth2/authorize?client_id=99&scope=bot&permissions=8",
        )
        self.assertEqual(
            urls.bot_authorize_url(99, "bot", 8, 123, True),
            "https://discord.com/oauth2/authorize?client_id=99&scope=bot&permissions=8&guild_id=123&disable_guild_select=true",
        )

    def test_webhook_authorize_url(self):
        self.assertEqual(
            urls.webhook_authorize_url(99, "https://example.com/hook", "s1"),
            "https://discord.com/oauth2/authorize?response_type=code&client_id=99&scope=webhook.incoming"
            "&state=s1&redirect_uri=https%3A%2F%2Fexample.com%2Fhook",
        )


if __name__ == "__main__":
    run_suite(ResourceUrlTestSuite, OAuthUrlTestSuite)
