import requests


def load_remote_secrets(api_key, api_url):
    """Fetch the InfluxDB credentials for this station from the config API."""
    try:
        response = requests.get(api_url, params={"key": api_key}, timeout=5)
        response.raise_for_status()
        secrets = response.json()

        if "error" in secrets:
            raise ValueError("Server error: " + secrets["error"])

        return {
            "INFLUX_URL": secrets.get("influx_url"),
            "INFLUX_TOKEN": secrets.get("influx_token"),
            "INFLUX_ORG": secrets.get("influx_org"),
            "INFLUX_BUCKET": secrets.get("influx_bucket"),
            "STATION_ID": secrets.get("station_id"),
        }

    except (requests.RequestException, ValueError) as e:
        print("Could not load secrets:", e)
        return None
