"""Flask web layer for News Curator."""
