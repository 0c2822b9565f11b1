from rna_hairpin.scripts.find_hairpins import main

if __name__ == '__main__':
    raise SystemExit(main())
