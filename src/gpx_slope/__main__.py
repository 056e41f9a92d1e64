from gpx_slope.cli import main

main()
