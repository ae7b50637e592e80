"""
api
---

FastAPI routers mounted under `/api` by `main.py`:

- `assign`: assignment generation and registry listings.
- `entities`: participant/target CRUD.
- `history`: recent assignment history.
- `healthcheck`: public liveness probe.
"""
