#!/usr/bin/env python3
"""
FaunaHelper - Basic Usage Example

This example demonstrates:
- Creating a helper from the FAUNA_SECRET environment variable
- Creating single and multiple documents
- Listing, reading, updating, replacing and deleting documents
- Looking documents up through an index

It expects a 'users' collection and a 'users_by_email' index on
data.email to exist.
"""
import asyncio
import logging

from faunahelper import FaunaError, NotFound, create_helper


async def main():
    print("=" * 60)
    print("FaunaHelper - Basic Usage Example")
    print("=" * 60)

    helper = create_helper()

    # Check connection
    try:
        helper.client.ping()
    except FaunaError as e:
        print(f"✗ Failed to reach the database: {e}")
        return
    print("✓ Successfully reached the database")

    print("\n1. CREATE ONE")
    print("-" * 60)
    ann = await helper.create_document('users', {
        'name': 'Ann Lee',
        'email': 'ann@example.com',
        'address': {'city': 'Oslo', 'zip': '0150'},
    })
    ann_id = ann['ref'].id()
    print(f"Created user with ID: {ann_id}")

    print("\n2. CREATE MANY")
    print("-" * 60)
    created = await helper.create_multiple_documents('users', [
        {'name': 'Bob Smith', 'email': 'bob@example.com'},
        {'name': 'Cid Moreau', 'email': 'cid@example.com'},
    ])
    print(f"Created {len(created)} users")

    print("\n3. LIST")
    print("-" * 60)
    for user in await helper.list_documents('users', page_size=5):
        print(f"  - {user['ref'].id()}: {user['data']['name']}")

    print("\n4. GET BY INDEX")
    print("-" * 60)
    bob = await helper.get_by_index('users_by_email', 'bob@example.com')
    print(f"Found {bob['data']['name']} by email")

    print("\n5. UPDATE")
    print("-" * 60)
    updated = await helper.update_document('users', ann_id, {'address': {'zip': '0151'}})
    print(f"Updated address: {updated['data']['address']}")

    print("\n6. REPLACE")
    print("-" * 60)
    replaced = await helper.replace_document('users', ann_id, {'name': 'Ann Lee'})
    print(f"Fields after replace: {sorted(replaced['data'])}")

    print("\n7. DELETE")
    print("-" * 60)
    for doc in [ann] + created:
        await helper.delete_document('users', doc['ref'].id())
    try:
        await helper.get_by_ref('users', ann_id)
    except NotFound:
        print("✓ Deleted documents are gone")


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
