"""Test suite for stargaze."""
