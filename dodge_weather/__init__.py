"""
Dodge the Weather
=================

This package contains the simulation core, rendering and Gymnasium wrapper
for "Dodge the Weather", a small avoidance game where the falling obstacles
follow the current weather:

- Sunny: medium-sized suns falling at medium speed
- Cloudy: wide, slow clouds
- Rainy: thin, fast raindrops

All tunable parameters are in game_config.yaml.
"""
