# scripts/simulate_drive.py
import argparse
import random
import time
from datetime import datetime

import requests

# event type -> (min, max) score deduction
EVENTS = {
    "braking": (3, 8),
    "speeding": (5, 15),
    "swerving": (5, 12),
    "phone_usage": (10, 20),
}


def generate_event():
    event_type = random.choice(list(EVENTS))
    low, high = EVENTS[event_type]
    return {"eventType": event_type, "scoreDeduction": random.randint(low, high)}


def main():
    parser = argparse.ArgumentParser(description="Post random driving events to a running RoadRisk server")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--events", type=int, default=10)
    parser.add_argument("--interval", type=float, default=2.0)
    parser.add_argument("--reset", action="store_true", help="clear the log before starting")
    args = parser.parse_args()

    if args.reset:
        requests.post(f"{args.base_url}/api/driver/reset", timeout=5).raise_for_status()
        print("[Simulator] Driver log reset")

    print(f"[Simulator] Posting {args.events} events to {args.base_url} every {args.interval}s")
    for _ in range(args.events):
        event = generate_event()
        resp = requests.post(f"{args.base_url}/api/driver/log", json=event, timeout=5)
        resp.raise_for_status()
        body = resp.json()
        print(f"[{datetime.utcnow().strftime('%H:%M:%S')}] {event['eventType']} "
              f"-{event['scoreDeduction']} -> score {body['newScore']}")
        time.sleep(args.interval)

    summary = requests.get(f"{args.base_url}/api/driver/score", timeout=5).json()
    print(f"[Simulator] Final score {summary['currentScore']} ({summary['badge']})")


if __name__ == "__main__":
    main()
