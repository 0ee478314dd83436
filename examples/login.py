import asyncio
import sys

import oauthcord


async def main(code: str) -> None:
    async with oauthcord.Client.from_env() as client:
        session = client.session()
        result = await session.login(code)
        if result.is_error:
            print("Login failed:", result.payload)
            return

        user = await session.fetch_user()
        print(f"Logged in as {user['username']}")

        guilds = await session.fetch_guilds()
        for guild in guilds.payload:
            print(f" - {guild['name']} ({guild['id']})")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        client = oauthcord.Client.from_env()
        print(client.oauth2.authorize_url("identify,guilds", state="example"))
        print("Open the URL above, then run this again with the code from the redirect.")
    else:
        asyncio.run(main(sys.argv[1]))
