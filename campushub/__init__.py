"""
Campus hub backend service.

Provides the JSON API behind the campus information portal: status cards
(hand-written notices plus automated uptime checks), a short-range view of
the campus calendar feed, and an anonymous submit/moderate/publish workflow
for shared course materials.

All state lives in a key-value store (see :mod:`.services.store`); every
request is a read-modify-write against one key.
"""
