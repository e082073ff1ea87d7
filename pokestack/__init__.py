_instances = {}

def __getattr__(name):
	if name == 'tk':
		if 'tk' not in _instances:
			from .config import Config
			from .toolkit import Toolkit
			_instances['tk'] = Toolkit(Config.from_env())
		return _instances['tk']

	raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

__all__ = ['tk']
