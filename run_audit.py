import httpx
import json
import sys

API_BASE = "http://localhost:3020"
TARGET_URL = "https://www.example.com/"

def run_audit(site_url: str, keyword: str = None, location: str = None):
    print(f"Starting audit for {site_url}...")
    payload = {"siteUrl": site_url}
    if keyword and location:
        payload.update({"keyword": keyword, "location": location})

    try:
        # PageSpeed runs can take close to a minute
        resp = httpx.post(f"{API_BASE}/run-audit", json=payload, timeout=120.0)
        data = resp.json()

        if resp.status_code != 200:
            print(f"Audit failed ({resp.status_code}): {data.get('error')}")
            if data.get("details"):
                print(f"Details: {data['details']}")
            return

        print(f"Final score: {data['finalScore']} / 10")
        print(json.dumps(data, indent=2))

    except httpx.HTTPError as e:
        print(f"Error: {e}")

if __name__ == "__main__":
    args = sys.argv[1:]
    run_audit(args[0] if args else TARGET_URL, *args[1:3])
