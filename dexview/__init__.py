"""dexview: PokeAPI aggregation service with JSON and HTML front-ends."""
