#!/usr/bin/env python3
import argparse
import logging
import sys

from src.analysis import WeatherCorrelationAnalyzer
from src.config import load_config, merge_config_with_args, get_default_value


def print_report(overview, results):
    commits = overview['commits']
    weather = overview['weather']
    prs = overview['pull_requests']

    print(f"Commits: {commits['total_commits']} in {commits['total_repos']} repos "
          f"({commits['date_range_start']} .. {commits['date_range_end']})")
    print(f"Pull requests: {prs['total_prs']} ({prs['merged_prs']} merged)")
    print(f"Weather days: {weather['weather_days']} "
          f"({weather['date_range_start']} .. {weather['date_range_end']})")
    print(f"Paired days: {len(results['daily_metrics'])}")

    print("\n=== CORRELATIONS (Pearson r vs commits per day) ===")
    correlations = results['correlations']
    print(f"temperature:   {correlations['temp_vs_commits']:+.3f}")
    print(f"precipitation: {correlations['precip_vs_commits']:+.3f}")
    print(f"daylight:      {correlations['daylight_vs_commits']:+.3f}")

    print("\n=== BY SEASON ===")
    for row in results['seasonal_stats']:
        print(f"{row['season']:<8} {row['commit_count']:>6} commits  "
              f"{row['avg_commits_per_day']:.2f}/day  {row['avg_lines_changed']:.1f} lines  "
              f"{row['avg_temp']:.1f}°F  {row['avg_precipitation']:.2f}\"")

    print("\n=== BY TEMPERATURE ===")
    for row in results['commits_by_temp']:
        print(f"{row['temp_range']:<20} {row['commit_count']:>6} commits  {row['avg_lines_changed']:.1f} lines")

    print("\n=== BY PRECIPITATION ===")
    for row in results['commits_by_precip']:
        print(f"{row['precip_category']:<26} {row['commit_count']:>6} commits  {row['avg_commits_per_day']:.2f}/day")


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    parser = argparse.ArgumentParser(
        description='Correlate stored commit activity with stored weather'
    )

    parser.add_argument(
        '--config',
        help='Path to configuration file (YAML/YML)',
        type=str
    )

    parser.add_argument(
        '--database-url',
        default=get_default_value('database_url'),
        help='SQLAlchemy database URL'
    )

    cli_args = parser.parse_args()
    args = merge_config_with_args(cli_args, load_config(cli_args.config))

    try:
        print("Starting Commit / Weather Analysis")
        print("=" * 40)

        analyzer = WeatherCorrelationAnalyzer(args.database_url, args.timezone)
        print_report(analyzer.overview(), analyzer.analyze())

    except Exception as e:
        print(f"Analysis failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
