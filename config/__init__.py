"""
config
------

File locations (`paths`) and tunable constants (`constants.json`).
"""
