from __future__ import annotations

# Positional epsilon for near-zero distance/length checks.
EPS_POS = 1e-12

# Area epsilon for degenerate polygon checks.
EPS_AREA = 1e-12

# Vertex weld epsilon used when comparing ring endpoints.
EPS_WELD = 1e-9

# Distance tolerance for buffered outlines (shapely approximates round joins with segments).
EPS_BUFFER = 1e-6
