from typing import Optional, Union

Identifier = Union[str, int]

class PokestackError(Exception):
	pass

class InvalidSpeciesError(PokestackError):
	def __init__(self, species_id: Identifier, form: Optional[str] = None):
		self.species_id = species_id
		self.form = form

		if form is None:
			super().__init__(f"No base profile for species: {species_id}")
		else:
			super().__init__(f"No base profile for species {species_id} in form '{form}'")

class AlreadyOwnedError(PokestackError):
	def __init__(self, pokemon_id: Identifier):
		self.pokemon_id = pokemon_id
		super().__init__(f"Can't capture Pokemon already owned: {pokemon_id}")

class PlayerNotFoundError(PokestackError):
	def __init__(self, user_id: Optional[Identifier]):
		self.user_id = user_id
		super().__init__(f"User not found: {user_id}")

class CreatureNotFoundError(PokestackError):
	def __init__(self, pokemon_id: Identifier):
		self.pokemon_id = pokemon_id
		super().__init__(f"Pokemon not found: {pokemon_id}")

class TransientPersistenceError(PokestackError):
	"""The store changed under a write; reload and retry the whole operation."""

class DistributionConvergenceError(PokestackError):
	def __init__(self, iterations: int, evs: list[int]):
		self.iterations = iterations
		self.evs = evs
		super().__init__(
			f"EV redistribution did not converge after {iterations} iterations "
			f"(sum={sum(evs)}, evs={evs})"
		)
