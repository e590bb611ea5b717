from qr_relay.main import main

main()
