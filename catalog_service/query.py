"""Paginated, sortable and searchable list queries.

Query string parameters are never trusted: ``limit`` and ``page`` fall back
to their defaults when they are not positive integers, and ``sort`` is
looked up in an explicit mapping of allowed keys to column objects so user
input never reaches the ORDER BY clause.
"""
import re

from catalog_service.model import Product, Review

DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1
DEFAULT_SORT = 'created_at'
DEFAULT_ORDER = 'desc'
ORDERS = ('asc', 'desc')

# largest value a 64-bit signed database integer can hold
MAX_INT64 = 2 ** 63 - 1

_INTEGER = re.compile(r'[+-]?[0-9]+')


def parse_positive_int(value, default):
    if not isinstance(value, str) or not _INTEGER.fullmatch(value):
        return default
    parsed = int(value)
    return parsed if 0 < parsed <= MAX_INT64 else default


class ListParams:
    def __init__(self, limit=DEFAULT_LIMIT, page=DEFAULT_PAGE, sort=DEFAULT_SORT,
                 order=DEFAULT_ORDER, search=''):
        self.limit = limit
        self.page = page
        self.sort = sort
        self.order = order
        self.search = search

    @property
    def offset(self):
        return (self.page - 1) * self.limit

    def __repr__(self):
        return (f'<ListParams limit={self.limit} page={self.page} sort={self.sort} '
                f'order={self.order} search={self.search!r}>')


class ListQuery:
    """Builds the filtered, ordered and bounded query for one model."""

    def __init__(self, model, sort_columns, search_column=None):
        self.model = model
        self.sort_columns = sort_columns
        self.search_column = search_column

    def parse(self, args, default_limit=DEFAULT_LIMIT):
        sort = args.get('sort')
        if sort not in self.sort_columns:
            sort = DEFAULT_SORT

        order = args.get('order')
        if order not in ORDERS:
            order = DEFAULT_ORDER

        search = ''
        if self.search_column is not None:
            search = args.get('search') or ''

        params = ListParams(
            limit=parse_positive_int(args.get('limit'), default_limit),
            page=parse_positive_int(args.get('page'), DEFAULT_PAGE),
            sort=sort,
            order=order,
            search=search,
        )
        if params.offset > MAX_INT64:
            params.page = DEFAULT_PAGE
        return params

    def filter(self, query, params):
        query = query.filter(self.model.deleted_at.is_(None))
        if params.search and self.search_column is not None:
            query = query.filter(self.search_column.icontains(params.search, autoescape=True))
        return query

    def order_by(self, params):
        column = self.sort_columns[params.sort]
        # id breaks ties so pages do not overlap
        if params.order == 'asc':
            return column.asc(), self.model.id.asc()
        return column.desc(), self.model.id.desc()

    def run(self, query, params):
        """Return ``(rows, pagination)`` for ``params`` applied to ``query``.

        ``total`` counts every matching row regardless of the page; asking for
        a page past the end yields no rows rather than an error.
        """
        query = self.filter(query, params)
        total = query.count()
        rows = (query.order_by(*self.order_by(params))
                .limit(params.limit)
                .offset(params.offset)
                .all())
        pagination = {
            "total": total,
            "page": params.page,
            "limit": params.limit,
            "pages": (total + params.limit - 1) // params.limit,
        }
        return rows, pagination


PRODUCT_LIST = ListQuery(
    Product,
    {
        'name': Product.name,
        'price': Product.price,
        'created_at': Product.created_at,
    },
    search_column=Product.name,
)

REVIEW_LIST = ListQuery(
    Review,
    {
        'content': Review.content,
        'created_at': Review.created_at,
        'updated_at': Review.updated_at,
    },
)
