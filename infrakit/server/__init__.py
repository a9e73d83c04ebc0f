"""Server protocol, the TCP health-check server and the event server."""