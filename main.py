from supcourt.scraper.cli import main

if __name__ == "__main__":
    # Same as the installed ``supcourt-harvest`` console script.
    raise SystemExit(main())
