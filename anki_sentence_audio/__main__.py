from anki_sentence_audio.cli import main

main()
