import kdeswitch

if __name__ == '__main__':
	kdeswitch.run_as_a_module()
