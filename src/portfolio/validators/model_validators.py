from sqlalchemy import inspect as sa_inspect


def find_unknown_model_kwargs(model, values: dict) -> list[str]:
    """
    Return the keys of `values` that are not mapped attributes of `model`.
    - model: the SQLAlchemy model class (not instance)
    """
    allowed = {attr.key for attr in sa_inspect(model).attrs}
    return [k for k in values if k not in allowed]
