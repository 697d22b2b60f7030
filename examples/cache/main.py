"""Demonstration of the auth cache across a schema upgrade and a sign-in attempt.

Steps:
1. Seed the storage area with legacy (pre-client-id) entries.
2. Create the cache: legacy entries are copied into the client-scoped schema.
3. Start an attempt: cache its authority under a correlation key and mark
   the renewal as in progress.
4. Sweep: the in-progress attempt is left alone.
5. Complete the attempt and sweep again: its entries disappear.
6. Look up cached access tokens for the signed-in account.

Set REDIS_URL to run the same flow against a shared Redis area.
"""

import logging
import os
import uuid

from authcache import AccessTokenKey, AccessTokenValue, AuthCache, CacheConfig, Constants
from authcache.cache.keys import renew_status_key


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = CacheConfig(client_id="demo-client", redis_url=os.getenv("REDIS_URL"))
    storage = config.create_storage()
    storage.set_item("msal.idtoken", "legacy.id.token")
    storage.set_item("msal.client.info", "legacy-client-info")

    # Construct over the seeded area so the migration has something to copy
    cache = AuthCache(config.client_id, storage=storage)
    print("Migrated id token:", cache.get_item("idtoken"))

    state = uuid.uuid4().hex
    authority_key = cache.build_authority_correlation_key(state)
    cache.set_item(authority_key, "https://login.microsoftonline.com/common/")
    cache.set_item(renew_status_key(state), Constants.token_renew_status_in_progress)

    print("Swept while in progress:", cache.remove_temporary_entries(state))
    print("Authority still cached:", cache.get_item(authority_key))

    cache.set_item(renew_status_key(state), Constants.token_renew_status_completed)
    print("Swept after completion:", cache.remove_temporary_entries(state))
    print("Authority cached after sweep:", repr(cache.get_item(authority_key)))

    key = AccessTokenKey(
        authority="https://login.microsoftonline.com/common/",
        client_id=config.client_id,
        scopes="user.read mail.read",
        home_account_identifier="home-account-1",
    )
    value = AccessTokenValue(
        access_token="access-token",
        id_token="id-token",
        expires_in="3600",
        home_account_identifier="home-account-1",
    )
    cache.set_item(key.cache_key(), value.to_json())
    for item in cache.get_all_access_tokens(config.client_id, "home-account-1"):
        print("Cached token scopes:", item.key.scope_list)

    print("Entries removed by reset:", cache.reset_all())


if __name__ == "__main__":
    main()
