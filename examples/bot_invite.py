import asyncio

import oauthcord

GUILD_ID = 123456789012345678
ROLE_ID = 234567890123456789
USER_ID = 345678901234567890


async def main() -> None:
    async with oauthcord.Client.from_env() as client:
        url = client.oauth2.bot_authorize_url(["bot", "applications.commands"], permissions=8, guild_id=GUILD_ID)
        if isinstance(url, oauthcord.ValidationError):
            print(url)
            return
        print("Invite the bot:", url)

        roles = await client.resources.call("get_guild_roles", guild_id=GUILD_ID)
        for role in roles.payload:
            print(f"{role['name']}: {role['id']}")

        result = await client.resources.add_member_role(GUILD_ID, USER_ID, ROLE_ID)
        print("Role added" if result.status == 204 else f"Failed: {result.payload}")


asyncio.run(main())
