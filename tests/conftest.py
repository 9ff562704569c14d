"""
Pytest configuration for Monkey tests.
"""
import sys
import os

import pytest

# Make `import monkey` work from a plain checkout (src/ layout)
_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
_SRC_DIR = os.path.join(_ROOT, 'src')

if _SRC_DIR not in sys.path:
	sys.path.insert(0, _SRC_DIR)


@pytest.fixture
def run():
	"""Parse and evaluate a snippet in a fresh Environment, failing on parse errors."""
	from monkey.environment import Environment
	from monkey.evaluator import evaluate
	from monkey.parser import parse

	def _run(source, env=None):
		program, errors = parse(source)
		assert errors == [], f"parser errors: {errors}"
		return evaluate(program, env if env is not None else Environment())

	return _run
