"""pytest-bdd step implementations."""
