"""Testing – doubles for exercising routing trees in unit tests."""
