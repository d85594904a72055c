# Settings for an exploration session

# Seed used when none is given on the command line
MAP_SEED = 20240317

# Hex corner radius in pixels (pointy-top; flat-to-flat width is sqrt(3) * HEX_SIZE)
HEX_SIZE = 38

# Real-world scale: each hex represents this many km
HEX_KM = 10

# Hexagon map radius in steps from the centre. Hex count = 3*R^2 + 3*R + 1
HEX_MAP_RADIUS = 63

# Number of points of interest scattered over the map, home settlement included
POI_COUNT = 40

# Biome profile: "wilderness", "ruined", "structured" or "expedition"
BIOME_PROFILE = "wilderness"

# When True every tile starts explored (no fog of war)
DEBUG_NO_FOG = False
