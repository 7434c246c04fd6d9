"""HTTP interface: FastAPI dependencies and routers."""
