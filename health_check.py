#!/usr/bin/env python3
"""
Backend Health Check Script
Checks that a running NeuralArch Search backend answers and that its database
and mock AI endpoints are usable.
"""

import os
import sys
from datetime import datetime

import requests

BASE_URL = os.getenv("NEURALARCH_URL", "http://localhost:8000").rstrip("/")


def check_backend_health():
    """Check if the backend is running and healthy"""
    try:
        response = requests.get(f"{BASE_URL}/health", timeout=10)
        body = response.json()
        if response.status_code == 200:
            print(f"✅ Backend is running (database: {body.get('database')}, cache: {body.get('cache')})")
            return True
        print(f"❌ Backend returned status code: {response.status_code} {body}")
        return False
    except requests.exceptions.ConnectionError:
        print(f"❌ Cannot connect to backend at {BASE_URL}")
        print("   Make sure the backend is running with: python -m uvicorn neuralarch.main:app --reload --port 8000")
        return False
    except (requests.exceptions.RequestException, ValueError) as e:
        print(f"❌ Error checking backend health: {e}")
        return False


def check_database():
    """Check the database banner endpoint"""
    try:
        response = requests.get(f"{BASE_URL}/api/database/status", timeout=10)
        body = response.json()
        if body.get("connected"):
            print("✅ Database is accessible")
            return True
        print(f"❌ {body.get('message')}")
        return False
    except (requests.exceptions.RequestException, ValueError) as e:
        print(f"❌ Error checking database: {e}")
        return False


def check_assistant():
    """Send one chat message through the assistant"""
    try:
        response = requests.post(
            f"{BASE_URL}/api/chat",
            json={"messages": [{"role": "user", "content": "hello"}]},
            timeout=10,
        )
        if response.status_code == 200 and response.json().get("content"):
            print("✅ Assistant chat is answering")
            return True
        print(f"❌ Chat endpoint returned status code: {response.status_code}")
        print(f"   Response: {response.text[:200]}...")
        return False
    except (requests.exceptions.RequestException, ValueError) as e:
        print(f"❌ Error checking chat endpoint: {e}")
        return False


def check_stats():
    """Global counts exercise every table through the façade"""
    try:
        response = requests.get(f"{BASE_URL}/api/stats", timeout=10)
        if response.status_code == 200:
            stats = response.json()
            print(f"✅ Stats: {stats['total_experiments']} experiments, "
                  f"{stats['total_architectures']} architectures, "
                  f"{stats['total_ai_conversations']} conversations")
            return True
        print(f"❌ Stats endpoint returned status code: {response.status_code}")
        return False
    except (requests.exceptions.RequestException, ValueError, KeyError) as e:
        print(f"❌ Error checking stats: {e}")
        return False


def main():
    """Main health check function"""
    print("🔍 NeuralArch Search Backend Health Check")
    print("=" * 40)
    print(f"Time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print()

    checks = [
        ("Backend Health", check_backend_health),
        ("Database", check_database),
        ("Assistant", check_assistant),
        ("Global Stats", check_stats),
    ]

    results = []
    for name, check_func in checks:
        print(f"Checking {name}...")
        result = check_func()
        results.append((name, result))
        print()

    # Summary
    print("📊 Health Check Summary")
    print("=" * 40)
    passed = sum(1 for _, result in results if result)
    total = len(results)

    for name, result in results:
        status = "✅ PASS" if result else "❌ FAIL"
        print(f"{name}: {status}")

    print()
    print(f"Overall: {passed}/{total} checks passed")

    if passed == total:
        print("🎉 All systems are operational!")
        return 0
    print("⚠️  Some systems need attention. Check the errors above.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
