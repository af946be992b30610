#!/usr/bin/env python3
"""
Basic walk example showing event-driven traversal with walkerlib.

This example demonstrates:
- Subscribing to walker events
- Pruning directories
- Reporting errors without stopping the walk
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from walkerlib.aio import Walker, ContinueOnErrorsPolicy, exclude_names


async def main():
    """Walk a directory and summarise what was found."""
    # Get the root path from command line or use current directory
    root_path = sys.argv[1] if len(sys.argv) > 1 else str(Path.cwd())

    print(f"Walking: {root_path}")
    print("-" * 50)

    counts = {}
    total_size = 0
    large_files = []

    def count(key):
        def listener(path, st):
            counts[key] = counts.get(key, 0) + 1
        return listener

    def on_file(path, st):
        nonlocal total_size
        total_size += st.st_size
        # Track files larger than 1MB
        if st.st_size > 1_000_000:
            large_files.append((path, st.st_size))

    walker = Walker(root_path)
    walker.set_directory_filter(exclude_names('.git', '__pycache__', 'node_modules'))
    walker.on('entry', count('entries'))
    walker.on('file', on_file)
    walker.on('dir', count('dirs'))
    policy = ContinueOnErrorsPolicy(verbose=True).attach(walker)
    await walker.join()

    # Print summary
    print(f"\nWalk Summary:")
    print(f"  Entries: {counts.get('entries', 0):,}")
    print(f"  Directories: {counts.get('dirs', 0):,}")
    print(f"  Total File Size: {total_size / 1024 / 1024:.1f} MB")
    print(f"  Errors: {len(policy.errors)}")

    if large_files:
        print(f"\nLarge Files (>1MB):")
        # Sort by size and show top 5
        large_files.sort(key=lambda x: x[1], reverse=True)
        for path, size in large_files[:5]:
            print(f"  {size / 1024 / 1024:.1f} MB: {Path(path).name}")


if __name__ == "__main__":
    asyncio.run(main())
