from revbot.services.github.models import CheckRunOutput, Review, ReviewComment

__all__ = ["CheckRunOutput", "Review", "ReviewComment"]
