from urlregistry.models.short_url_model import ShortURLModel


__all__ = ['ShortURLModel']
