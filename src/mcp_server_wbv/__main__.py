from mcp_server_wbv import main

main()
