# An example of how you can use discord.lookup to simply do API requests only
# Instead of having a bot online
import asyncio

from discord_lookup import Client, get_json_string

client = Client(token="BOT_TOKEN")


async def main():
    user = await client.fetch_user("86477779717066752")
    print(repr(user))

    members = await client.fetch_members("GUILD_ID")
    broken = sum(1 for m in members if m.is_placeholder())
    print(f"{len(members)} members, {broken} could not be parsed")

    with open("members.json", "w", encoding="utf-8") as f:
        f.write(get_json_string(members))


asyncio.run(main())
