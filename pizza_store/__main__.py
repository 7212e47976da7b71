from pizza_store.cli import main

if __name__ == "__main__":
    main()
