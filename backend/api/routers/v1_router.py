from fastapi import APIRouter

from api.routers import customers, debts, sales, dashboard, cron

routes = APIRouter()

# Include all routers
routes.include_router(customers.router)
routes.include_router(debts.router)
routes.include_router(sales.router)
routes.include_router(dashboard.router)

# Scheduled jobs
routes.include_router(cron.router)
