from flask import request


def page_args(default_limit=20, max_limit=100):
    """Read ``page``/``limit`` query params, clamped the same way everywhere."""
    page = request.args.get('page', 1, type=int)
    limit = request.args.get('limit', default_limit, type=int)
    if page < 1:
        page = 1
    if limit < 1 or limit > max_limit:
        limit = default_limit
    return page, limit


def paginated(query, page, limit):
    """Run ``paginate`` on a query and return (items, pagination dict)."""
    result = query.paginate(page=page, per_page=limit, error_out=False)
    return result.items, {
        'page': page,
        'limit': limit,
        'total': result.total,
        'pages': result.pages,
        'has_next': result.has_next,
        'has_prev': result.has_prev,
    }
