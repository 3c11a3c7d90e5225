# tests/conftest.py
import os
import sys

# Ensure src is on PYTHONPATH for tests
src_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, "src"))
if src_root not in sys.path:
    sys.path.insert(0, src_root)

# Required settings; nothing connects during tests
os.environ.setdefault("NEO4J_URI", "bolt://localhost:7687")
os.environ.setdefault("NEO4J_USERNAME", "neo4j")
os.environ.setdefault("NEO4J_PASSWORD", "test-password")
