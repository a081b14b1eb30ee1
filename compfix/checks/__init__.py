"""Problem sources — where the list of insecure paths comes from."""
