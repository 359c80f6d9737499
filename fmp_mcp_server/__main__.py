from fmp_mcp_server.main import main

main()
