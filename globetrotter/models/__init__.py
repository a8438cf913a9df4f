from .user.user import User
from .catalog.city import City
from .catalog.activity import Activity
from .trips.trip_model import Trip
from .trips.stop_model import TripStop, TripActivity
from .trips.budget_model import TripBudget
from .trips.share_model import TripShare
