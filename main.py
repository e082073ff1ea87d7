import argparse
import logging
from pokestack.config import Config
from pokestack.toolkit import Toolkit

logging.basicConfig(
	level=logging.INFO,
	format='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
	datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger(__name__)

def main() -> None:
	parser = argparse.ArgumentParser(description="Seed the world with wild Pokemon")
	parser.add_argument("count", type=int)
	parser.add_argument("--lat", type=float, default=0.0)
	parser.add_argument("--lng", type=float, default=0.0)
	parser.add_argument("--radius", type=float, default=5000.0, help="metres around the center")
	args = parser.parse_args()

	config = Config.from_env()
	tk = Toolkit(config)
	created = tk.seed_world(args.count, {"lat": args.lat, "lng": args.lng}, args.radius)
	logger.info(f"World now holds {tk.pokemon.count()} Pokemon ({len(created)} new)")

if __name__ == "__main__":
	main()
