#!/usr/bin/env python3
"""
Utility: show what a provider's raw response looks like.

Usage:
  python scripts/inspect_provider.py --provider reddit --query "python" --raw

Fetches one configured provider (built-in or from PROVIDERS_PATH), prints the
keys of the first item at its results path and the items the current paths
extract. Use it while writing title/url/content paths for a new API.
"""
from __future__ import annotations
import argparse
import asyncio
import json
import os
import sys

# Add project src to path if not already available
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from bplus_research.config import get_settings
from bplus_research.retrieval.adapters import registry
from bplus_research.retrieval.errors import InvalidShapeError, ProviderError
from bplus_research.retrieval.fetch import ProviderClient
from bplus_research.retrieval.introspect import format_introspection


async def inspect(name: str, query: str, show_raw: bool) -> int:
    specs = {spec.name: spec for spec in registry.snapshot()}
    spec = specs.get(name)
    if spec is None:
        print(f"Unknown provider '{name}'. Configured: {', '.join(specs) or 'none'}")
        return 1

    client = ProviderClient()
    try:
        response = await client.fetch(spec, query, get_settings().PROVIDER_TIMEOUT_SECONDS)
    except InvalidShapeError as e:
        print(f"Shape error: {e.message}")
        print(format_introspection(spec, e.raw))
        if show_raw:
            print(json.dumps(e.raw, indent=2)[:4000])
        return 1
    except ProviderError as e:
        print(f"Provider failed: {e.reason}")
        return 1

    print(format_introspection(spec, response.raw))
    print(f"{len(response.items)} of {response.raw_count} items extracted:")
    for item in response.items[:5]:
        print("---")
        print(f"title:   {item.title}")
        print(f"url:     {item.url}")
        print(f"content: {item.content[:120]}")
    if show_raw:
        print(json.dumps(response.raw, indent=2)[:4000])
    return 0


def main():
    p = argparse.ArgumentParser(description="Inspect the raw response of one provider")
    p.add_argument("--provider", required=True, help="Provider name as configured")
    p.add_argument("--query", default="python", help="Query to send")
    p.add_argument("--raw", action="store_true", help="Also dump the start of the raw JSON")
    args = p.parse_args()

    sys.exit(asyncio.run(inspect(args.provider, args.query, args.raw)))


if __name__ == '__main__':
    main()
