"""Order workflow for the coffee shop.

Orders link a customer to the products they bought. USERs place orders for
themselves; ADMIN and SUPER users move orders through their statuses, and
only SUPER users delete them. Every handler delegates to the service module,
which also enforces that USERs only read their own orders."""
