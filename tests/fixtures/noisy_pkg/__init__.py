"""Package with a subpackage that must never be imported when ignored."""
