"""HTTP controllers, one `APIRouter` per entity type.

Each module exposes `router`; `ROUTERS` is what `courseapp.main`
mounts on the application.
"""

from . import dining_commons, menu_item_reviews, organizations, recommendation_requests, ucsb_dates, users

ROUTERS = [
    ucsb_dates.router,
    menu_item_reviews.router,
    recommendation_requests.router,
    organizations.router,
    dining_commons.router,
    users.router,
]
