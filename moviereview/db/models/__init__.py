from moviereview.db.models.movie import Movie
from moviereview.db.models.review import Review
from moviereview.db.models.user import User

__all__ = ["Movie", "Review", "User"]
