#!/usr/bin/env python3
"""Benchmark script for the book API."""

import argparse
import statistics
import time
import uuid

import httpx


def seed_books(client: httpx.Client, base_url: str, count: int) -> list[str]:
    """Log in and create ``count`` books. Returns their ids."""
    response = client.post(
        f"{base_url}/api/login",
        json={"username": "admin", "password": "password"},
    )
    response.raise_for_status()

    run_id = uuid.uuid4().hex[:6]
    book_ids = []
    for i in range(count):
        response = client.post(
            f"{base_url}/api/books",
            json={
                "title": f"Benchmark Book {i + 1}",
                "code": f"bench-{run_id}-{i}",
                "author": "Benchmark",
                "year": 2000 + i % 25,
            },
        )
        response.raise_for_status()
        book_ids.append(response.json()["data"]["id"])
    return book_ids


def benchmark_endpoint(client: httpx.Client, url: str, num_requests: int) -> dict:
    """Run GET requests against ``url`` and return latency statistics."""
    latencies = []
    errors = 0

    for i in range(num_requests):
        try:
            start = time.perf_counter()
            response = client.get(url)
            elapsed = (time.perf_counter() - start) * 1000  # ms

            if response.status_code == 200:
                latencies.append(elapsed)
            else:
                errors += 1
                print(f"  Request {i + 1}: ERROR ({response.status_code})")

        except httpx.HTTPError as e:
            errors += 1
            print(f"  Request {i + 1}: EXCEPTION ({e})")

    if not latencies:
        return {"error": "All requests failed"}

    return {
        "total_requests": num_requests,
        "successful_requests": len(latencies),
        "failed_requests": errors,
        "latency_ms": {
            "min": min(latencies),
            "max": max(latencies),
            "mean": statistics.mean(latencies),
            "median": statistics.median(latencies),
            "stdev": statistics.stdev(latencies) if len(latencies) > 1 else 0,
            "p95": sorted(latencies)[int(len(latencies) * 0.95)],
        },
    }


def print_results(name: str, results: dict) -> None:
    print()
    print("=" * 50)
    print(name)
    print("=" * 50)

    if "error" in results:
        print(f"Error: {results['error']}")
        return

    print(f"Total requests:      {results['total_requests']}")
    print(f"Successful:          {results['successful_requests']}")
    print(f"Failed:              {results['failed_requests']}")
    print("Latency (ms):")
    for key in ("min", "max", "mean", "median", "stdev", "p95"):
        print(f"  {key.capitalize():<18} {results['latency_ms'][key]:.2f}")


def main():
    parser = argparse.ArgumentParser(description="Benchmark the book API")
    parser.add_argument(
        "--url",
        default="http://localhost:8000",
        help="Base URL of the book API",
    )
    parser.add_argument(
        "--books",
        type=int,
        default=50,
        help="Number of books to seed before measuring",
    )
    parser.add_argument(
        "--requests",
        type=int,
        default=100,
        help="Number of requests per endpoint",
    )
    args = parser.parse_args()

    with httpx.Client(timeout=30.0) as client:
        print(f"Seeding {args.books} books...")
        book_ids = seed_books(client, args.url, args.books)

        print_results(
            "GET /api/books",
            benchmark_endpoint(client, f"{args.url}/api/books", args.requests),
        )
        if book_ids:
            print_results(
                "GET /api/books/{id}",
                benchmark_endpoint(client, f"{args.url}/api/books/{book_ids[0]}", args.requests),
            )

        for book_id in book_ids:
            client.delete(f"{args.url}/api/books/{book_id}")


if __name__ == "__main__":
    main()
