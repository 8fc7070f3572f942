# storefront/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
from requests import exceptions as req_exc


def http_retry():
    #retry tylko bledy transportu, 4xx/5xx z raise_for_status leca od razu
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type((req_exc.ConnectionError, req_exc.Timeout)),
    )
