from urllib.parse import urlparse
from chromium_remote.logging.logger import logger

CLEAR_STORAGE_SCRIPTS = (
    "localStorage.clear(); sessionStorage.clear();",
    "indexedDB.databases().then(dbs => dbs.forEach(db => indexedDB.deleteDatabase(db.name)));",
    "caches.keys().then(keys => keys.forEach(key => caches.delete(key)));",
    "navigator.serviceWorker.getRegistrations().then(regs => regs.forEach(reg => reg.unregister()));",
)


def get_domain(url: str) -> str:
    parsed = urlparse(url if "://" in url else f"http://{url}")
    return parsed.hostname or ""


def clear_data_for_url(driver, url: str) -> int:
    """
    Load *url* in *driver*, then clear the cache, the cookies of its domain
    and the storage of its origin. Returns the number of deleted cookies.
    """
    domain = get_domain(url)
    logger.info(f"Clearing browser data for domain: {domain}")

    driver.get(url)

    driver.execute_cdp_cmd("Network.clearBrowserCache", {})

    deleted = 0
    for cookie in driver.get_cookies():
        cookie_domain = cookie.get("domain")
        if cookie_domain and domain in cookie_domain:
            driver.delete_cookie(cookie["name"])
            deleted += 1

    for script in CLEAR_STORAGE_SCRIPTS:
        driver.execute_script(script)

    logger.info(f"Deleted {deleted} cookies for {domain}")
    return deleted
