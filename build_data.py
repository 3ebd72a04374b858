#!/usr/bin/python3.12
from ivory_data.build import main

if __name__ == '__main__':
    main()
