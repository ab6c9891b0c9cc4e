"""KDP integration — async client for the variant specification API."""
