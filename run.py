import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from multibooru import SITES, BooruError, create_client  # noqa: E402

OPERATIONS = (
    "post",
    "md5",
    "random",
    "randoms",
    "count",
    "last",
    "comments",
    "last-comments",
    "related",
    "wiki",
    "tag",
    "tags",
    "autocomplete",
    "check",
)


def dump(result):
    if isinstance(result, list):
        return [item.model_dump(mode="json") for item in result]
    if hasattr(result, "model_dump"):
        return result.model_dump(mode="json")
    return result


async def run(args):
    async with create_client(args.site) as booru:
        tags = args.tags or []
        op = args.operation

        if op == "post":
            return await booru.get_post_by_id(args.id)
        if op == "md5":
            return await booru.get_post_by_md5(args.query)
        if op == "random":
            return await booru.get_random_post(*tags)
        if op == "randoms":
            return await booru.get_random_posts(args.limit or 10, *tags)
        if op == "count":
            return await booru.get_post_count(*tags)
        if op == "last":
            return await booru.get_last_posts(*tags, limit=args.limit)
        if op == "comments":
            return await booru.get_comments(args.id)
        if op == "last-comments":
            return await booru.get_last_comments()
        if op == "related":
            return await booru.get_related(args.query)
        if op == "wiki":
            return await booru.get_wiki(args.query)
        if op == "tag":
            if args.id is not None:
                return await booru.get_tag_by_id(args.id)
            return await booru.get_tag(args.query)
        if op == "tags":
            return await booru.get_tags(args.query)
        if op == "autocomplete":
            return await booru.autocomplete(args.query)
        await booru.check_availability()
        return {"site": args.site, "available": True}


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Query a booru from the command line")
    parser.add_argument("site", choices=sorted(SITES), help="Known booru to query")
    parser.add_argument("operation", choices=OPERATIONS, help="Operation to run")
    parser.add_argument("query", nargs="?", help="Title, tag name, MD5 or search text")
    parser.add_argument("--tags", nargs="*", help="Tags to search with")
    parser.add_argument("--id", type=int, help="Post or tag id")
    parser.add_argument("--limit", type=int, help="Number of posts to return")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
        print("Debug mode enabled", file=sys.stderr)
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        result = asyncio.run(run(args))
    except (BooruError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(dump(result), indent=2, ensure_ascii=False))
