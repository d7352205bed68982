"""
Entry point for the cookie crawler.
Parses arguments, registers logging hooks, runs the crawl, prints the cookie report and a summary.
"""

import argparse
import json
import logging
import sys
import time

from cookie_crawler.core import HEADLESS, MAX_CRAWL_DEPTH, add_file_handler, logger
from cookie_crawler.crawler import CookieCrawler
from cookie_crawler.errors import CrawlError


def build_parser():
    parser = argparse.ArgumentParser(description="Cookie Crawler CLI")
    parser.add_argument("url", help="Start URL; the crawl stays on its scheme://host/")
    parser.add_argument("--depth", type=int, default=MAX_CRAWL_DEPTH, help="Maximum crawl depth (0 = start page only)")
    parser.add_argument("--headful", action="store_true", default=not HEADLESS, help="Show the browser window")
    parser.add_argument("--delay", type=float, default=0.0, help="Seconds to pause after each rendered page")
    parser.add_argument("--output", help="Write the cookie report to this JSON file instead of stdout")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--verbose", action="store_true", help="Log frontier decisions")
    return parser


def register_logging_hooks(crawler, delay=0.0):
    def log_visit(url, crawl_depth):
        logger.info(f"Visiting: {crawl_depth} {url}", extra={'context': 'cli'})

    def log_progress(url, crawl_depth, cookies, session):
        logger.info(f"Number of cookies found so far: {len(cookies)}", extra={'context': 'cli'})
        if delay > 0:
            time.sleep(delay)

    crawler.register_pre_visit_hook(log_visit)
    crawler.register_post_visit_hook(log_progress)


def write_report(cookies, output=None):
    payload = json.dumps([c.to_dict() for c in cookies], indent=2)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
        logger.info(f"Cookie report written to {output}", extra={'context': 'cli'})
    else:
        print(payload)


def print_summary(crawler, cookies, duration):
    print("\n==============================", file=sys.stderr)
    print("COOKIE CRAWL SUMMARY", file=sys.stderr)
    print("==============================", file=sys.stderr)
    print(f"Start URL:        {crawler.start_url}", file=sys.stderr)
    print(f"Domain:           {crawler.domain}", file=sys.stderr)
    print(f"Max Depth:        {crawler.max_crawl_depth}", file=sys.stderr)
    print(f"Duration:         {duration:.2f} seconds", file=sys.stderr)
    print(f"URLs Visited:     {len(crawler.visited_urls())}", file=sys.stderr)
    print(f"Cookies Found:    {len(cookies)}", file=sys.stderr)
    print("==============================\n", file=sys.stderr)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    previous_level = logger.level
    if args.verbose:
        logger.setLevel(logging.DEBUG)
    file_handler = add_file_handler(logger, args.log_file) if args.log_file else None

    try:
        return run(args)
    finally:
        logger.setLevel(previous_level)
        if file_handler is not None:
            logger.removeHandler(file_handler)
            file_handler.close()


def run(args) -> int:
    start_time = time.time()
    try:
        crawler = CookieCrawler(args.url, args.depth)
        register_logging_hooks(crawler, args.delay)
        logger.info(f"Starting for: {crawler.start_url} with a maximum crawl depth of: {crawler.max_crawl_depth}", extra={'context': 'cli'})
        cookies = crawler.start_crawl(headless=not args.headful)
    except CrawlError as e:
        logger.error(f"Crawl failed: {e}", extra={'context': 'cli'})
        return 1

    write_report(cookies, args.output)
    print_summary(crawler, cookies, time.time() - start_time)
    return 0


if __name__ == "__main__":
    sys.exit(main())
