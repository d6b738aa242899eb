from autothreads.adapters.discord.launcher import main

main()
