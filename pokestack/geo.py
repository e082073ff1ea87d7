import math
from pokestack.constants import EARTH_RADIUS_METERS

def offset_location(location: dict[str, float], offset: dict[str, float]) -> dict[str, float]:
	"""Moves a lat/lng point by offset["horz"] and offset["vert"] metres."""
	lat = location["lat"]
	lng = location["lng"]

	new_lat = lat + 180 * offset["vert"] / (math.pi * EARTH_RADIUS_METERS)
	lat_rad = ((lat + new_lat) / 2) * math.pi / 180
	new_lng = lng + 180 * offset["horz"] / (math.pi * EARTH_RADIUS_METERS * math.cos(lat_rad))

	if new_lng > 180 or new_lng < -180:
		new_lng = new_lng - math.copysign(360, new_lng)

	# crossing a pole lands on the opposite meridian
	if new_lat > 90 or new_lat < -90:
		new_lat = math.copysign(180, new_lat) - new_lat
		new_lng = new_lng - math.copysign(180, new_lng)

	return {"lat": new_lat, "lng": new_lng}

def offset_dist_sq(offset: dict[str, float]) -> float:
	return offset["horz"] ** 2 + offset["vert"] ** 2

def random_location(center: dict[str, float], radius: float, rng) -> dict[str, float]:
	return offset_location(center, {
		"horz": rng.uniform(-radius, radius),
		"vert": rng.uniform(-radius, radius)
	})
