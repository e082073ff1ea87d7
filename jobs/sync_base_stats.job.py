import asyncio
import logging
import sys
from pokestack.api.sync import fetch_base_stats
from pokestack.config import Config

logging.basicConfig(
	level=logging.INFO,
	format='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
	datefmt='%Y-%m-%d %H:%M:%S'
)

start = int(sys.argv[1]) if len(sys.argv) > 1 else 1
end = int(sys.argv[2]) if len(sys.argv) > 2 else 386

entries = asyncio.run(fetch_base_stats(start, end, Config.from_env().base_stats_path))
print(f"Saved base stats for {len(entries)} species")
