"""Manual script to fetch and display what the work data backend returns."""
import asyncio
import json
from datetime import date, timedelta

import aiohttp

# Replace this with your backend address
BASE_URL = "http://localhost:88"


async def check_work_data():
    """Fetch and display this week's records and today's live record."""
    today = date.today()
    week_start = today - timedelta(days=today.weekday())
    week_end = week_start + timedelta(days=6)

    async with aiohttp.ClientSession() as session:
        print("=" * 60)
        print("FETCHING WEEK RECORDS")
        print("=" * 60)

        params = {"startDate": week_start.isoformat(), "endDate": week_end.isoformat()}
        async with session.get(f"{BASE_URL}/work-data", params=params) as response:
            if response.status != 200:
                print(f"❌ Failed to get work data: {response.status}")
                return

            records = await response.json(content_type=None)
            print(f"✅ {len(records)} records between {week_start} and {week_end}")

            for record in records:
                hours = record.get("hours", 0)
                minutes = record.get("minutes", 0)
                extra = record.get("extraminutes", 0)
                print(f"{record.get('date')}: {hours}h {minutes}m (+{extra}m extra)")

        print("\n" + "=" * 60)
        print("FETCHING LIVE RECORDS")
        print("=" * 60)

        yesterday = today - timedelta(days=1)
        dates = ",".join(day.strftime("%d-%m-%Y") for day in (yesterday, today))
        async with session.get(f"{BASE_URL}/worktime", params={"dates": dates}) as response:
            print(f"Response Status: {response.status}")

            if response.status == 200:
                data = await response.json(content_type=None)
                print(json.dumps(data, indent=2))
            else:
                error_text = await response.text()
                print(f"\n❌ Error: {response.status}")
                print(f"Response: {error_text}")


async def main():
    """Run the check."""
    print("=" * 60)
    print("WORK DATA BACKEND CHECK")
    print("=" * 60)

    await check_work_data()

    print("\n" + "=" * 60)
    print("CHECK COMPLETE")
    print("=" * 60)

if __name__ == "__main__":
    asyncio.run(main())
