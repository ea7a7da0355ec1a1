"""Fails on import so that importing it is visible in scan logs."""
raise RuntimeError("noisy_pkg.loud was imported")
