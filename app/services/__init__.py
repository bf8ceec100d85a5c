# Services package.
#
# Data access, one module per aggregate:
#
#   article_service  — article listing (sort/filter allow-lists), detail
#                      with live comment_count, relative vote updates
#   comment_service  — comment listing, insert, vote updates, delete
#   topic_service    — topic listing
#   user_service     — user listing and lookup
#
# On top of those:
#
#   existence        — single-query probes that raise NotFound
#   operations       — compound request operations (probe, then act)
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.  The one exception is
# ``operations.fetch_comments_for_article``, which takes the session
# factory because it runs two queries concurrently.
