"""Word list used to build diceware passphrases (lowercase, ASCII only)."""

WORDS = [
    "abeille", "abricot", "acier", "agneau", "aigle", "aiguille", "album", "amande",
    "ananas", "ancre", "anneau", "arbre", "argent", "armoire", "arrosoir", "atelier",
    "avion", "badge", "bague", "baleine", "balcon", "bambou", "banane", "barque",
    "bateau", "bazar", "berger", "beurre", "bijou", "biscuit", "blouse", "bocal",
    "bonbon", "bouclier", "bougie", "boussole", "branche", "brioche", "brique", "bruine",
    "cabane", "cactus", "cadre", "caillou", "calcul", "camion", "canard", "canot",
    "caramel", "carnet", "carotte", "castor", "cerise", "chalet", "chameau", "chapeau",
    "chateau", "chemin", "chene", "cheval", "chiffre", "citron", "clairon", "clavier",
    "cloche", "cobalt", "comete", "compas", "concert", "copain", "coquille", "corail",
    "cornet", "coton", "couleur", "courage", "crayon", "cristal", "cuivre", "cygne",
    "dauphin", "dentelle", "desert", "diamant", "domino", "dragon", "drapeau", "duvet",
    "echarpe", "eclair", "ecorce", "ecureuil", "elephant", "email", "encre", "epice",
    "equipe", "escargot", "etoile", "facteur", "falaise", "farine", "fenetre", "festin",
    "feuille", "ficelle", "figue", "flamme", "fleuve", "flocon", "fontaine", "foret",
    "fougere", "fraise", "framboise", "fromage", "fusee", "galet", "gazelle", "girafe",
    "glacier", "gomme", "gorille", "goudron", "grenier", "griffon", "guitare", "hamac",
    "hameau", "harpe", "hibou", "horizon", "horloge", "huile", "igloo", "image",
    "indigo", "jaguar", "jardin", "jasmin", "jongleur", "journal", "jumelle", "kayak",
    "koala", "lagune", "lampe", "lanterne", "lavande", "legume", "lezard", "licorne",
    "limace", "lotus", "loutre", "lumiere", "lune", "madame", "magnet", "maillot",
    "maison", "mandarine", "manteau", "marbre", "marmotte", "matelas", "melodie", "meteore",
    "miroir", "moineau", "montagne", "moulin", "mouton", "muguet", "musique", "nacre",
    "nuage", "oasis", "ocean", "olive", "orage", "orange", "orchidee", "ortie",
    "otarie", "outil", "panda", "papier", "paquet", "parasol", "pastel", "pelouse",
    "perle", "piano", "pinceau", "planete", "plume", "poire", "pollen", "pomme",
    "prairie", "prune", "puzzle", "quartz", "radeau", "raisin", "rameau", "renard",
    "requin", "rivage", "riviere", "robot", "roseau", "rubis", "ruche", "sable",
    "sacoche", "safran", "salade", "sapin", "saphir", "satin", "saumon", "sentier",
    "serpent", "silence", "sirop", "soleil", "sommet", "source", "tambour", "tapis",
    "theiere", "tigre", "tilleul", "tomate", "tonnerre", "tortue", "toucan", "tournesol",
    "train", "trefle", "tresor", "tulipe", "tunnel", "vague", "vallee", "vanille",
    "velours", "verger", "violon", "volcan", "wagon", "yaourt", "zebre", "zephyr",
]
