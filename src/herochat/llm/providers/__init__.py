from .heroku import HerokuProvider

__all__ = ["HerokuProvider"]
