#!/usr/bin/env python3
# Example usage of json_record_store

import asyncio

from json_record_store import RecordStore, setup_logging


async def main() -> None:
    setup_logging("INFO")

    # Creates demo_data/demo.json containing [] if it is not there yet
    store = RecordStore("demo_data/demo.json")

    await store.write_record({"name": "Alice", "age": 33})
    await store.write_record({"name": "Bob", "age": 17})
    await store.write_record(None)

    print("Count:", await store.get_count_json())
    print("First:", await store.get_first_record())
    print("Last:", await store.get_last_record())

    # Substring search over the serialized payload
    for r in await store.find_records_by_data("Alice"):
        print("Alice record:", r["id"], r["created"])

    # Hierarchical date prefix: year, year-month, day, hour ...
    today = (await store.get_last_record())["created"][:10]
    print("Written today:", len(await store.find_records_by_date(today)))

    # Delete by id; the next id is max(remaining) + 1
    await store.delete_record_by_id(2)
    await store.write_record({"name": "Carol"})
    print("Ids:", [r["id"] for r in await store.get_all_records()])

    # Malformed bounds do not raise; the error is kept on the store
    print("Range:", await store.find_records_by_date_range("not-a-date", "2100-01-01"))
    print("Last error:", repr(store.last_error))

    await store.delete_all_records()


if __name__ == "__main__":
    asyncio.run(main())
