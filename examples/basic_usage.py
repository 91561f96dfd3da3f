#!/usr/bin/env python3
"""
Basic usage examples for the Discourse API client.

Creates a user, a category, a topic and a post, then logs the user out.
Set DISCOURSE_HOST and DISCOURSE_API_KEY before running.
"""

import asyncio
from datetime import datetime

from discourse_api import DiscourseClient, RateLimitedError, TransportError


async def create_content(api: DiscourseClient):
    """Walk through a typical provisioning flow."""
    print("=== Users ===")

    result = await api.create_user(
        "John Doe", "johndoe", "johndoe@example.com", "foobar!!"
    )
    print(f"✓ create_user: {result}")

    # activation needs the id
    user = await api.get_user_by_username("johndoe")
    result = await api.activate_user(user.payload["user"]["id"])
    print(f"✓ activate_user: {result.status_code}")

    print("\n=== Categories and topics ===")

    result = await api.create_category("a new category", "cc2222")
    if not result.is_success:
        print(f"❌ Category creation failed ({result.status_code}): {result.payload}")
        return
    category_id = result.payload["category"]["id"]

    result = await api.create_topic(
        "This is the title of a brand new topic",
        "This is the body text of a brand new topic. Enjoy the topic!",
        category_id,
        "johndoe",
    )
    topic_id = result.payload["topic_id"]
    print(f"✓ Created topic {topic_id}")

    result = await api.create_post(
        "This is the body of a new post in an existing topic",
        topic_id,
        "johndoe",
        datetime.now(),
    )
    print(f"✓ Created post: {result.status_code}")

    # admin-only site settings, not user preferences
    result = await api.change_site_setting("invite_expiry_days", 29)
    print(f"✓ change_site_setting: {result.status_code}")

    await api.logout_user("johndoe")


async def main():
    async with DiscourseClient.from_settings() as api:
        try:
            await create_content(api)
        except RateLimitedError as e:
            print(f"❌ Rate limited, retry after {e.retry_after}s")
        except TransportError as e:
            print(f"❌ Connection error: {e}")


def blocking_usage():
    """The same client from synchronous code."""
    api = DiscourseClient.from_settings()
    try:
        result = api.get_sync("/categories.json")
        print(f"✓ {len(result.payload['category_list']['categories'])} categories")
    finally:
        api.close_sync()


if __name__ == "__main__":
    asyncio.run(main())
    blocking_usage()
