"""Sample robot configuration package used by discovery tests."""
