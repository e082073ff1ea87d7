import asyncio
import logging
import orjson
from pathlib import Path
from typing import Optional, Union
from curl_cffi import requests
from pokestack.constants import DEFAULT_FORM, STAT_KEYS

logger = logging.getLogger(__name__)

POKEAPI_BASE = "https://pokeapi.co/api/v2"

def form_name(species_name: str, variety_name: str, is_default: bool) -> str:
    if is_default:
        return DEFAULT_FORM

    prefix = f"{species_name}-"
    if variety_name.startswith(prefix):
        return variety_name[len(prefix):]
    return variety_name

def parse_stats(pokemon: dict) -> dict[str, int]:
    stats = {s["stat"]["name"]: s["base_stat"] for s in pokemon.get("stats", [])}
    return {k: stats[k] for k in STAT_KEYS if k in stats}

def build_entry(species: dict, varieties: list[tuple[dict, dict]]) -> Optional[dict]:
    """Turns a species payload and its (variety, pokemon) payload pairs into a base-stats entry."""
    forms = {}

    for variety, pokemon in varieties:
        stats = parse_stats(pokemon)
        if len(stats) != len(STAT_KEYS):
            logger.warning(f"Skipping {pokemon.get('name')}: incomplete stats")
            continue

        name = form_name(species["name"], variety["pokemon"]["name"], variety.get("is_default", False))
        forms[name] = stats

    if not forms:
        return None

    return {"id": species["id"], "name": species["name"], "forms": forms}

async def _get_json(session: requests.AsyncSession, url: str) -> Optional[dict]:
    resp = await session.get(url, impersonate="chrome")
    if resp.status_code != 200:
        logger.warning(f"GET {url} returned {resp.status_code}")
        return None
    return resp.json()

async def fetch_species(session: requests.AsyncSession, species_id: int) -> Optional[dict]:
    species = await _get_json(session, f"{POKEAPI_BASE}/pokemon-species/{species_id}/")
    if species is None:
        return None

    varieties = species.get("varieties", [])
    payloads = await asyncio.gather(*(
        _get_json(session, v["pokemon"]["url"]) for v in varieties
    ))

    pairs = [(v, p) for v, p in zip(varieties, payloads) if p is not None]
    return build_entry(species, pairs)

async def fetch_base_stats(
    start: int = 1,
    end: int = 386,
    output: Union[str, Path] = "data/api/base-stats.json"
) -> list[dict]:
    async with requests.AsyncSession() as session:
        tasks = [fetch_species(session, species_id) for species_id in range(start, end + 1)]
        results = await asyncio.gather(*tasks)

    entries = [entry for entry in results if entry is not None]
    logger.info(f"Fetched base stats for {len(entries)}/{end - start + 1} species")

    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(entries, option=orjson.OPT_INDENT_2))

    return entries
