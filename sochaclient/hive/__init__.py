"""Game logic for Hive: hex coordinates, board, pieces, move validation and move generation."""